"""
Schemas module for request/response models
"""

from app.schemas.chat import (
    ChatAction,
    ChatRequest,
    ChatResponse,
    CapabilitiesResponse
)

from app.schemas.integrations import (
    IntegrationDescriptor,
    IntegrationView,
    IntegrationListResponse
)

from app.schemas.knowledge_base import (
    KnowledgeDocument,
    DocumentInsights,
    KnowledgeBaseStats
)

from app.schemas.upload import (
    ProcessedFile,
    SkippedFile,
    UploadResponse
)

from app.schemas.health import (
    RootResponse,
    HealthResponse
)

__all__ = [
    "ChatAction",
    "ChatRequest",
    "ChatResponse",
    "CapabilitiesResponse",
    "IntegrationDescriptor",
    "IntegrationView",
    "IntegrationListResponse",
    "KnowledgeDocument",
    "DocumentInsights",
    "KnowledgeBaseStats",
    "ProcessedFile",
    "SkippedFile",
    "UploadResponse",
    "RootResponse",
    "HealthResponse",
]
