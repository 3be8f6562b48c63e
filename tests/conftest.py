import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from app.config import settings
from app.langgraph import chat_nodes
from app.langgraph.chat_nodes import get_chat_llm


class FakeChatLLM:
    """Stands in for ChatOpenAI; records the messages it was called with"""

    def __init__(self, content="", error=None, model_name="gpt-4o-mini-2024-07-18"):
        self.content = content
        self.error = error
        self.model_name = model_name
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content, response_metadata={"model_name": self.model_name})


class FakeResponse:
    """Minimal requests.Response replacement"""

    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


# --- Settings ---
@pytest.fixture(autouse=True)
def no_llm_key(monkeypatch):
    """Run every test without a configured LLM unless a test installs a fake"""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    get_chat_llm.cache_clear()
    yield
    get_chat_llm.cache_clear()


# --- LLM fakes ---
@pytest.fixture
def install_llm(monkeypatch):
    """Replace the chat LLM factory with a fake built from the given arguments"""
    def _install(**kwargs):
        fake = FakeChatLLM(**kwargs)
        monkeypatch.setattr(chat_nodes, "get_chat_llm", lambda: fake)
        return fake
    return _install


@pytest.fixture
def unreachable_llm(install_llm):
    return install_llm(error=ConnectionError("Connection refused"))


# --- App client ---
@pytest.fixture
def client():
    """TestClient with startup hooks run, so stores and the chat graph exist"""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fake_response():
    """Factory for requests.Response stand-ins"""
    return FakeResponse
