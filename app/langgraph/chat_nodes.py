"""LangGraph node implementations for the assistant chat workflow."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from app.config import settings
from app.schemas.chat import ChatAction
from app.services.template_selector import select_rule, select_template
from app.utils import preview


PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

FALLBACK_MODEL = "fallback"
MAX_ATTACHMENT_CHARS = 2000


def _require_setting(value: Optional[str], name: str) -> str:
    if not value:
        raise ValueError(f"Missing required configuration: {name}")
    return value


def _load_prompt(filename: str) -> str:
    path = PROMPTS_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8")


SYSTEM_PROMPT = _load_prompt("assistant_system.txt")


@lru_cache(maxsize=1)
def get_chat_llm() -> ChatOpenAI:
    """Initialize and cache the chat completion client."""
    return ChatOpenAI(
        model=settings.LLM_MODEL,
        temperature=0.7,
        api_key=_require_setting(settings.OPENAI_API_KEY, "OPENAI_API_KEY"),
        base_url=settings.LLM_BASE_URL,
        timeout=settings.LLM_TIMEOUT,
        max_retries=settings.LLM_MAX_RETRIES,
    )


def _summarize_attachments(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    summaries: List[Dict[str, Any]] = []
    for item in items:
        summary: Dict[str, Any] = {
            "type": item.get("type"),
            "filename": item.get("filename"),
            "size": len(item.get("data") or ""),
        }
        # Only text attachments are forwarded; binary payloads stay server-side
        if item.get("type") == "text":
            summary["text"] = (item.get("data") or "")[:MAX_ATTACHMENT_CHARS]
        summaries.append(summary)
    return summaries


def serialize_user_message(state: Dict[str, Any]) -> str:
    """Render the request as the JSON document sent as the user turn."""
    payload: Dict[str, Any] = {"message": state.get("message", "")}
    action: Optional[ChatAction] = state.get("action")
    if action:
        payload["action"] = action.value
    if state.get("context"):
        payload["context"] = state["context"]
    if state.get("multimodal"):
        payload["attachments"] = _summarize_attachments(state["multimodal"])
    return json.dumps(payload, ensure_ascii=False, indent=2)


async def classify_request(state: Dict[str, Any]) -> Dict[str, Any]:
    message: str = state.get("message", "")
    rule = select_rule(message, state.get("action"))

    logger.debug("Request classified", rule=rule.name, message_preview=preview(message))
    return {
        "rule": rule.name,
        "autonomous_actions": list(rule.autonomous_actions),
        "integrations_suggested": list(rule.integrations),
    }


async def generate_llm_response(state: Dict[str, Any]) -> Dict[str, Any]:
    try:
        llm = get_chat_llm()
        response = await llm.ainvoke([
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=serialize_user_message(state)),
        ])
        text = (response.content or "").strip() if isinstance(response.content, str) else ""
        if not text:
            raise ValueError("Empty completion returned by model")

        model_name = (getattr(response, "response_metadata", None) or {}).get("model_name") or settings.LLM_MODEL
        logger.info("LLM response generated", model=model_name, answer_preview=preview(text))
        return {"response": text, "model": model_name, "source": "llm"}
    except Exception as exc:
        logger.warning(f"LLM call failed, using fallback templates: {exc}")
        return {"error": str(exc)}


async def fallback_template(state: Dict[str, Any]) -> Dict[str, Any]:
    response = select_template(state.get("message", ""), state.get("action"))
    logger.info("Fallback template selected", rule=state.get("rule"))
    return {"response": response, "model": FALLBACK_MODEL, "source": "fallback"}
