"""Schemas for chat endpoints."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator


class ChatAction(str, Enum):
    """Action hints the chat UI may send alongside a message"""

    GENERAL = "general"
    EMAIL_DRAFT = "email_draft"
    MEETING_PREP = "meeting_prep"
    REPORT_GENERATION = "report_generation"
    TASK_MANAGEMENT = "task_management"
    INTEGRATION_SETUP = "integration_setup"


class ChatTurn(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatContext(BaseModel):
    """Optional caller context; unknown keys are dropped"""

    user_name: Optional[str] = Field(default=None, description="Display name of the user")
    page: Optional[str] = Field(default=None, description="UI page the message was sent from")
    history: List[ChatTurn] = Field(default_factory=list, description="Previous conversation turns")
    preferences: Dict[str, Any] = Field(default_factory=dict, description="Free-form user preferences")


class MultimodalItem(BaseModel):
    type: str = Field(..., description="Attachment kind, e.g. text, image, file")
    data: str = Field(..., description="Attachment payload (text or base64)")
    filename: Optional[str] = None


class ChatRequest(BaseModel):
    message: Optional[str] = Field(default=None, description="User message to process")
    context: Optional[ChatContext] = Field(default=None, description="Optional structured context")
    action: Optional[ChatAction] = Field(default=None, description="Optional action hint")
    multimodal: Optional[List[MultimodalItem]] = Field(default=None, description="Optional attachments")

    @field_validator("action", mode="before")
    @classmethod
    def _ignore_unknown_action(cls, value: Any) -> Any:
        if value is None or isinstance(value, ChatAction):
            return value
        if isinstance(value, str) and value in {action.value for action in ChatAction}:
            return value
        logger.warning("Ignoring unknown chat action", action=str(value)[:50])
        return None

    @field_validator("context", mode="before")
    @classmethod
    def _ignore_non_object_context(cls, value: Any) -> Any:
        if value is None or isinstance(value, (dict, ChatContext)):
            return value
        logger.warning("Ignoring non-object chat context", context_type=type(value).__name__)
        return None

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Can you draft a follow-up email for the client?",
                "action": "email_draft",
                "context": {"user_name": "Alex", "page": "chat"},
            }
        }


class ChatResponseContext(BaseModel):
    processed: bool = True
    confidence: float
    patterns_used: int
    autonomous_actions: List[str] = Field(default_factory=list)
    integrations_suggested: List[str] = Field(default_factory=list)


class ChatResponse(BaseModel):
    success: bool
    response: str
    timestamp: str
    model: str
    context: ChatResponseContext


class CapabilitiesResponse(BaseModel):
    message: str
    capabilities: List[str]
    status: str
