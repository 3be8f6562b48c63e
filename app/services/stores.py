"""
Connection and document stores.

The service runs in demo mode: OAuth tokens and uploaded documents are never
persisted. Both stores are injected through the service manager so a real
backend (or a test fake) can replace the in-memory versions.
"""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger

from app.schemas.knowledge_base import (
    DocumentInsights,
    DocumentMetadata,
    KnowledgeDocument,
)


class ConnectionStore(ABC):
    """Connection status, OAuth state and token bookkeeping"""

    @abstractmethod
    def status_map(self) -> Dict[str, Any]:
        """Flat map of `<id>`, `<id>_connected_at`, `<id>_last_sync`, `<id>_sync_status`"""

    @abstractmethod
    def store_oauth_state(self, state: str, integration_id: str) -> None:
        ...

    @abstractmethod
    def store_tokens(self, integration_id: str, tokens: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def mark_connected(self, integration_id: str, metadata: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def disconnect(self, integration_id: str) -> None:
        ...

    @abstractmethod
    def update_config(
        self,
        integration_id: str,
        config: Optional[Dict[str, Any]],
        settings: Optional[Dict[str, Any]],
    ) -> None:
        ...


SEED_CONNECTIONS: Dict[str, Any] = {
    "salesforce": "connected",
    "salesforce_connected_at": "2024-01-15T10:30:00Z",
    "salesforce_last_sync": "2024-01-16T14:22:00Z",
    "salesforce_sync_status": "syncing",
    "microsoft365": "available",
    "google_workspace": "available",
    "slack": "available",
    "zoom": "available",
    "jira": "available",
}


class InMemoryConnectionStore(ConnectionStore):
    """Process-local connection status; lost on restart"""

    def __init__(self, seed: Optional[Dict[str, Any]] = None):
        self._status: Dict[str, Any] = dict(SEED_CONNECTIONS if seed is None else seed)
        self._configs: Dict[str, Dict[str, Any]] = {}

    def status_map(self) -> Dict[str, Any]:
        return dict(self._status)

    def store_oauth_state(self, state: str, integration_id: str) -> None:
        # State tokens are validated by format only, nothing is kept
        logger.info("Storing OAuth state", state=state, integration_id=integration_id)

    def store_tokens(self, integration_id: str, tokens: Dict[str, Any]) -> None:
        logger.info(
            f"Storing tokens for {integration_id}",
            has_access_token=bool(tokens.get("access_token")),
            has_refresh_token=bool(tokens.get("refresh_token")),
            expires_in=tokens.get("expires_in"),
        )

    def mark_connected(self, integration_id: str, metadata: Dict[str, Any]) -> None:
        logger.info(f"Updating {integration_id} status to connected", metadata=metadata)
        self._status[integration_id] = "connected"
        self._status[f"{integration_id}_connected_at"] = metadata.get("connected_at")
        self._status[f"{integration_id}_last_sync"] = metadata.get("last_sync")
        self._status[f"{integration_id}_sync_status"] = "idle"

    def disconnect(self, integration_id: str) -> None:
        logger.info(f"Disconnecting integration: {integration_id}")
        self._status[integration_id] = "available"
        for suffix in ("connected_at", "last_sync", "sync_status"):
            self._status.pop(f"{integration_id}_{suffix}", None)

    def update_config(
        self,
        integration_id: str,
        config: Optional[Dict[str, Any]],
        settings: Optional[Dict[str, Any]],
    ) -> None:
        logger.info(
            f"Updating configuration for integration: {integration_id}",
            config=config,
            settings=settings,
        )
        self._configs[integration_id] = {"config": config or {}, "settings": settings or {}}


class DocumentStore(ABC):
    """Knowledge base document storage"""

    @abstractmethod
    def list_documents(self) -> List[KnowledgeDocument]:
        ...

    @abstractmethod
    def store(self, document: KnowledgeDocument) -> None:
        ...

    @abstractmethod
    def delete(self, document_ids: Iterable[str]) -> int:
        ...


SEED_DOCUMENTS: List[KnowledgeDocument] = [
    KnowledgeDocument(
        id="1",
        filename="sales-strategy-2024.pdf",
        type="pdf",
        size=245678,
        content=(
            "Our sales strategy for 2024 focuses on expanding into new markets while strengthening "
            "relationships with existing clients. Key initiatives include digital transformation, "
            "enhanced customer experience, and data-driven decision making."
        ),
        metadata=DocumentMetadata(
            upload_date="2024-01-10T09:30:00Z",
            processed_date="2024-01-10T09:35:00Z",
            source="salesforce",
            tags=["sales", "strategy", "2024"],
            category="business_planning",
        ),
        processed=True,
        insights=DocumentInsights(
            summary=(
                "Comprehensive sales strategy document outlining growth objectives and market "
                "expansion plans for 2024."
            ),
            key_points=[
                "Digital transformation initiatives",
                "Customer experience enhancement",
                "Data-driven decision making framework",
                "New market expansion strategy",
            ],
            sentiment="positive",
            importance_score=9,
        ),
    ),
    KnowledgeDocument(
        id="2",
        filename="team-meeting-notes.txt",
        type="txt",
        size=12543,
        content=(
            "Weekly team meeting notes covering project updates, blockers, and next steps. "
            "Discussed Q1 objectives and resource allocation. Action items assigned to team "
            "members with deadlines."
        ),
        metadata=DocumentMetadata(
            upload_date="2024-01-12T14:00:00Z",
            processed_date="2024-01-12T14:02:00Z",
            source="meeting_notes",
            tags=["meeting", "team", "weekly"],
            category="meetings",
        ),
        processed=True,
        insights=DocumentInsights(
            summary=(
                "Weekly team synchronization covering project status, challenges, and action "
                "item assignment."
            ),
            key_points=[
                "Q1 objectives alignment",
                "Resource allocation decisions",
                "Project blocker identification",
                "Action item assignment",
            ],
            sentiment="neutral",
            importance_score=7,
        ),
    ),
]


class DemoDocumentStore(DocumentStore):
    """Serves the seeded documents; writes and deletes are logged only"""

    def __init__(self, documents: Optional[List[KnowledgeDocument]] = None):
        self._documents = list(SEED_DOCUMENTS if documents is None else documents)

    def list_documents(self) -> List[KnowledgeDocument]:
        return [copy.deepcopy(document) for document in self._documents]

    def store(self, document: KnowledgeDocument) -> None:
        logger.info("Storing knowledge document", document_id=document.id, filename=document.filename)

    def delete(self, document_ids: Iterable[str]) -> int:
        document_ids = list(document_ids)
        logger.info("Deleting knowledge documents", document_ids=document_ids)
        return len(document_ids)
