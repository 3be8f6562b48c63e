"""
Knowledge base related schemas
"""
from typing import Optional, List, Dict, Literal
from pydantic import BaseModel, Field


DocumentType = Literal["pdf", "docx", "txt", "email", "chat", "csv", "json"]
Sentiment = Literal["positive", "neutral", "negative"]


class DocumentMetadata(BaseModel):
    """Upload bookkeeping and classification for a document"""
    upload_date: str = Field(..., description="ISO-8601 upload timestamp")
    processed_date: Optional[str] = Field(None, description="ISO-8601 processing timestamp")
    source: Optional[str] = Field(None, description="Where the document came from")
    tags: List[str] = Field(default_factory=list, description="Free-form tags")
    category: Optional[str] = Field(None, description="Document category")


class DocumentInsights(BaseModel):
    """AI or heuristic insights extracted from a document"""
    summary: str = Field(..., description="Short summary")
    key_points: List[str] = Field(default_factory=list, description="Key points")
    sentiment: Sentiment = Field("neutral", description="Overall sentiment")
    importance_score: int = Field(5, ge=1, le=10, description="Importance from 1 to 10")


class KnowledgeDocument(BaseModel):
    """Document held in the knowledge base"""
    id: str = Field(..., description="Document ID")
    filename: str = Field(..., description="File name")
    type: DocumentType = Field(..., description="Document type")
    size: int = Field(..., description="Size in bytes")
    content: str = Field(..., description="Extracted text content")
    metadata: DocumentMetadata
    processed: bool = Field(False, description="Whether insights have been generated")
    insights: Optional[DocumentInsights] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "1",
                "filename": "sales-strategy-2024.pdf",
                "type": "pdf",
                "size": 245678,
                "content": "Our sales strategy for 2024 focuses on expanding into new markets...",
                "metadata": {
                    "upload_date": "2024-01-10T09:30:00Z",
                    "processed_date": "2024-01-10T09:35:00Z",
                    "source": "salesforce",
                    "tags": ["sales", "strategy", "2024"],
                    "category": "business_planning"
                },
                "processed": True,
                "insights": {
                    "summary": "Comprehensive sales strategy document.",
                    "key_points": ["Digital transformation initiatives"],
                    "sentiment": "positive",
                    "importance_score": 9
                }
            }
        }


class KnowledgeBaseStats(BaseModel):
    """Aggregate statistics over a set of documents"""
    total_documents: int
    processed_documents: int
    processing_rate: int = Field(..., description="Processed share in percent")
    total_size_bytes: int
    total_size_mb: float
    type_breakdown: Dict[str, int]
    average_importance: float
    last_updated: str


class KnowledgeBaseListResponse(BaseModel):
    success: bool = True
    documents: List[KnowledgeDocument]
    stats: KnowledgeBaseStats
    total: int


class TextContentRequest(BaseModel):
    """JSON body for adding text content to the knowledge base"""
    content: Optional[str] = Field(None, description="Raw text content")
    type: DocumentType = Field("txt", description="Document type")
    filename: Optional[str] = None
    source: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "content": "Quarterly planning notes. Urgent: finalize budget before the deadline.",
                "type": "txt",
                "filename": "q2-planning.txt",
                "tags": ["planning"],
                "category": "business_planning"
            }
        }


class DocumentUploadResponse(BaseModel):
    success: bool = True
    document: KnowledgeDocument
    message: str


class DeleteDocumentsRequest(BaseModel):
    document_ids: Optional[List[str]] = Field(None, description="IDs of documents to delete")


class DeleteDocumentsResponse(BaseModel):
    success: bool = True
    deleted_count: int
    message: str
