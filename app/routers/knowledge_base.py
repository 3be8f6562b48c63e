"""
Knowledge base router
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger
from pydantic import ValidationError

from app.config import settings
from app.schemas.knowledge_base import (
    DeleteDocumentsRequest,
    DeleteDocumentsResponse,
    DocumentUploadResponse,
    KnowledgeBaseListResponse,
    TextContentRequest,
)
from app.services.knowledge_base_service import (
    KnowledgeBaseService,
    calculate_stats,
    filter_documents,
    preview_document,
    search_documents,
)
from app.services.service_manager import get_document_store, get_knowledge_base_service
from app.services.stores import DocumentStore


router = APIRouter(prefix="/api/knowledge-base", tags=["knowledge-base"])

UPLOAD_PREVIEW_CHARS = 200


@router.get("", response_model=KnowledgeBaseListResponse)
async def list_documents(
    query: Optional[str] = None,
    type: Optional[str] = None,
    processed: Optional[bool] = None,
    limit: int = settings.KB_DEFAULT_LIMIT,
    store: DocumentStore = Depends(get_document_store),
):
    """
    Retrieve knowledge base documents and statistics

    Args:
        query: Case-insensitive search over content, filename and tags
        type: Optional document type filter
        processed: Optional processed flag filter
        limit: Maximum number of documents returned
        store: Document store dependency
    """
    try:
        documents = filter_documents(store.list_documents(), type, processed)
        if query:
            documents = search_documents(documents, query)
        documents = documents[:max(limit, 0)]

        stats = calculate_stats(documents)
        documents = [preview_document(doc, settings.KB_CONTENT_PREVIEW_CHARS) for doc in documents]

        return KnowledgeBaseListResponse(
            documents=documents,
            stats=stats,
            total=len(documents),
        )
    except Exception as e:
        logger.error(f"Knowledge base GET error: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve knowledge base")


@router.post("", response_model=DocumentUploadResponse)
async def add_document(
    request: Request,
    store: DocumentStore = Depends(get_document_store),
    kb_service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    """Add a document from a multipart upload or from JSON text content"""
    content_type = request.headers.get("content-type", "")

    if "multipart/form-data" in content_type:
        document = kb_service.simulated_upload()
        message = "Document uploaded and processed successfully"
    else:
        try:
            payload = TextContentRequest(**await request.json())
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Invalid knowledge base payload: {e}")
            raise HTTPException(status_code=400, detail="Invalid request body")

        if not payload.content:
            raise HTTPException(status_code=400, detail="Content is required")

        document = kb_service.document_from_text(
            content=payload.content,
            doc_type=payload.type,
            filename=payload.filename,
            source=payload.source,
            tags=payload.tags,
            category=payload.category,
        )
        message = "Content processed and added to knowledge base"

    try:
        document = await kb_service.process_document(document)
        store.store(document)
    except Exception as e:
        logger.error(f"Knowledge base POST error: {e}")
        raise HTTPException(status_code=500, detail="Failed to process document")

    logger.info("Document added to knowledge base", document_id=document.id, filename=document.filename)
    return DocumentUploadResponse(
        document=preview_document(document, UPLOAD_PREVIEW_CHARS),
        message=message,
    )


@router.delete("", response_model=DeleteDocumentsResponse)
async def delete_documents(
    payload: DeleteDocumentsRequest,
    store: DocumentStore = Depends(get_document_store),
):
    """Remove documents from the knowledge base"""
    if payload.document_ids is None:
        raise HTTPException(status_code=400, detail="document_ids array is required")

    try:
        deleted_count = store.delete(payload.document_ids)
    except Exception as e:
        logger.error(f"Knowledge base DELETE error: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete documents")

    return DeleteDocumentsResponse(
        deleted_count=deleted_count,
        message=f"Successfully deleted {deleted_count} documents",
    )
