from app.langgraph.chat_flow import build_chat_graph

__all__ = ["build_chat_graph"]
