"""LangGraph chat flow definition."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, TypedDict

from langgraph.graph import END, StateGraph

from app.langgraph.chat_nodes import (
    classify_request,
    fallback_template,
    generate_llm_response,
)
from app.schemas.chat import ChatAction


class ChatState(TypedDict, total=False):
    message: str
    action: Optional[ChatAction]
    context: Optional[Dict[str, Any]]
    multimodal: List[Dict[str, Any]]
    rule: str
    autonomous_actions: List[str]
    integrations_suggested: List[str]
    response: str
    model: str
    source: Literal["llm", "fallback"]
    error: str


def _route_after_llm(state: ChatState) -> str:
    if state.get("response"):
        return "done"
    return "fallback"


def build_chat_graph():
    """Compile and return the chat workflow graph."""

    graph = StateGraph(ChatState)

    graph.add_node("classify_request", classify_request)
    graph.add_node("generate_llm_response", generate_llm_response)
    graph.add_node("fallback_template", fallback_template)

    graph.set_entry_point("classify_request")
    graph.add_edge("classify_request", "generate_llm_response")

    graph.add_conditional_edges(
        "generate_llm_response",
        _route_after_llm,
        {
            "done": END,
            "fallback": "fallback_template",
        },
    )

    graph.add_edge("fallback_template", END)

    return graph.compile()
