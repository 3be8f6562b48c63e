"""
Service manager for shared service instances
"""
from typing import Optional
from app.services.knowledge_base_service import KnowledgeBaseService
from app.services.stores import ConnectionStore, DocumentStore

# Global connection store instance
connection_store: Optional[ConnectionStore] = None

# Global document store instance
document_store: Optional[DocumentStore] = None

# Global knowledge base service instance
knowledge_base_service: Optional[KnowledgeBaseService] = None


def get_connection_store() -> ConnectionStore:
    """
    Get the connection store instance

    Returns:
        ConnectionStore instance

    Raises:
        RuntimeError: If store is not initialized
    """
    global connection_store
    if connection_store is None:
        raise RuntimeError("Connection store is not available")
    return connection_store


def set_connection_store(store: ConnectionStore) -> None:
    """
    Set the connection store instance

    Args:
        store: ConnectionStore instance to set
    """
    global connection_store
    connection_store = store


def get_document_store() -> DocumentStore:
    """
    Get the document store instance

    Returns:
        DocumentStore instance

    Raises:
        RuntimeError: If store is not initialized
    """
    global document_store
    if document_store is None:
        raise RuntimeError("Document store is not available")
    return document_store


def set_document_store(store: DocumentStore) -> None:
    """
    Set the document store instance

    Args:
        store: DocumentStore instance to set
    """
    global document_store
    document_store = store


def get_knowledge_base_service() -> KnowledgeBaseService:
    """
    Get the knowledge base service instance

    Returns:
        KnowledgeBaseService instance

    Raises:
        RuntimeError: If service is not initialized
    """
    global knowledge_base_service
    if knowledge_base_service is None:
        raise RuntimeError("Knowledge base service is not available")
    return knowledge_base_service


def set_knowledge_base_service(service: KnowledgeBaseService) -> None:
    """
    Set the knowledge base service instance

    Args:
        service: KnowledgeBaseService instance to set
    """
    global knowledge_base_service
    knowledge_base_service = service
