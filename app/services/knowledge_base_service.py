"""
Knowledge base service: document filtering, statistics and insight extraction
"""
import asyncio
import json
import time
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from openai import OpenAI
from pydantic import ValidationError

import regex

from app.config import settings
from app.schemas.knowledge_base import (
    DocumentInsights,
    DocumentMetadata,
    KnowledgeBaseStats,
    KnowledgeDocument,
)
from app.utils import truncate_with_ellipsis, utc_now_iso


PROMPTS_DIR = Path(__file__).resolve().parent.parent / "langgraph" / "prompts"

POSITIVE_WORDS = {"good", "great", "excellent", "successful", "achieve", "improve"}
NEGATIVE_WORDS = {"bad", "poor", "fail", "problem", "issue", "concern"}

SIMULATED_UPLOAD_CONTENT = (
    "This is simulated document content extracted from the uploaded file. In production, "
    "this would contain the actual extracted text from PDFs, Word documents, or other file types."
)


def generate_document_id() -> str:
    return f"{uuid.uuid4().hex[:10]}{int(time.time() * 1000):x}"


def filter_documents(
    documents: List[KnowledgeDocument],
    doc_type: Optional[str] = None,
    processed: Optional[bool] = None,
) -> List[KnowledgeDocument]:
    if doc_type:
        documents = [doc for doc in documents if doc.type == doc_type]
    if processed is not None:
        documents = [doc for doc in documents if doc.processed == processed]
    return documents


def search_documents(documents: List[KnowledgeDocument], query: str) -> List[KnowledgeDocument]:
    """Case-insensitive match on content, filename or tags, most important first"""
    query_lower = query.lower()
    matches = [
        doc for doc in documents
        if query_lower in doc.content.lower()
        or query_lower in doc.filename.lower()
        or any(query_lower in tag.lower() for tag in doc.metadata.tags)
    ]
    return sorted(
        matches,
        key=lambda doc: doc.insights.importance_score if doc.insights else 0,
        reverse=True,
    )


def calculate_stats(documents: List[KnowledgeDocument]) -> KnowledgeBaseStats:
    total_docs = len(documents)
    processed_docs = sum(1 for doc in documents if doc.processed)
    total_size = sum(doc.size for doc in documents)

    type_breakdown: Dict[str, int] = {}
    for doc in documents:
        type_breakdown[doc.type] = type_breakdown.get(doc.type, 0) + 1

    scores = [doc.insights.importance_score for doc in documents if doc.insights]
    avg_importance = sum(scores) / len(scores) if scores else 0.0

    return KnowledgeBaseStats(
        total_documents=total_docs,
        processed_documents=processed_docs,
        processing_rate=round(processed_docs / total_docs * 100) if total_docs else 0,
        total_size_bytes=total_size,
        total_size_mb=round(total_size / 1024 / 1024, 2),
        type_breakdown=type_breakdown,
        average_importance=round(avg_importance, 1),
        last_updated=utc_now_iso(),
    )


def extract_key_points(content: str) -> List[str]:
    sentences = [s.strip() for s in regex.split(r"[.!?]+", content)]
    return [s for s in sentences if len(s) > 20][:5]


def analyze_sentiment(content: str) -> str:
    words = content.lower().split()
    positive = sum(1 for word in words if word in POSITIVE_WORDS)
    negative = sum(1 for word in words if word in NEGATIVE_WORDS)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def calculate_importance_score(content: str) -> int:
    text = content.lower()
    score = 5
    if "urgent" in text or "important" in text:
        score += 2
    if "deadline" in text or "asap" in text:
        score += 1
    if "meeting" in text or "action" in text:
        score += 1
    if len(content) > 1000:
        score += 1
    return min(10, max(1, score))


def heuristic_insights(content: str) -> DocumentInsights:
    return DocumentInsights(
        summary=content[:200] + "...",
        key_points=extract_key_points(content),
        sentiment=analyze_sentiment(content),
        importance_score=calculate_importance_score(content),
    )


def parse_ai_insights(raw: str) -> DocumentInsights:
    """
    Parse the model's JSON answer into insights

    Raises:
        ValueError: If the answer is not valid JSON or misses required fields
    """
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("Insights payload is not a JSON object")

    score = data.get("importance_score", 5)
    try:
        data["importance_score"] = min(10, max(1, int(round(float(score)))))
    except (TypeError, ValueError):
        data["importance_score"] = 5
    if isinstance(data.get("sentiment"), str):
        data["sentiment"] = data["sentiment"].strip().lower()
    if isinstance(data.get("key_points"), list):
        data["key_points"] = [str(point) for point in data["key_points"] if point][:5]

    try:
        return DocumentInsights(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid insights payload: {e}") from e


class KnowledgeBaseService:
    """Document insight extraction with an OpenAI client and heuristic fallback"""

    def __init__(self, client: Optional[OpenAI] = None):
        """
        Initialize knowledge base service

        Args:
            client: Optional OpenAI client; built from settings when an API key is configured
        """
        if client is None and settings.OPENAI_API_KEY:
            client = OpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.LLM_BASE_URL,
                timeout=settings.LLM_TIMEOUT,
                max_retries=settings.LLM_MAX_RETRIES,
            )
        self.client = client
        self.prompt_template = (PROMPTS_DIR / "document_insights.txt").read_text(encoding="utf-8")

    def _request_insights(self, document: KnowledgeDocument) -> DocumentInsights:
        prompt = self.prompt_template.format(
            filename=document.filename,
            type=document.type,
            content=document.content[:2000],
        )
        response = self.client.chat.completions.create(
            model=settings.LLM_MODEL,
            messages=[
                {
                    "role": "system",
                    "content": "You are an AI document processor. Return valid JSON only.",
                },
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
            response_format={"type": "json_object"},
        )
        return parse_ai_insights(response.choices[0].message.content or "")

    async def process_document(self, document: KnowledgeDocument) -> KnowledgeDocument:
        """Attach insights to a document, falling back to heuristics when the model is unavailable"""
        insights: Optional[DocumentInsights] = None

        if self.client is not None:
            try:
                logger.info("Extracting document insights with LLM", filename=document.filename)
                insights = await asyncio.to_thread(self._request_insights, document)
                logger.success(f"AI insights extracted for {document.filename}")
            except Exception as e:
                logger.error(f"AI processing error: {e}")

        if insights is None:
            insights = heuristic_insights(document.content)

        return document.model_copy(update={
            "processed": True,
            "metadata": document.metadata.model_copy(update={"processed_date": utc_now_iso()}),
            "insights": insights,
        })

    @staticmethod
    def simulated_upload() -> KnowledgeDocument:
        """The fixed document produced for multipart uploads"""
        return KnowledgeDocument(
            id=generate_document_id(),
            filename="uploaded-document.pdf",
            type="pdf",
            size=1024000,
            content=SIMULATED_UPLOAD_CONTENT,
            metadata=DocumentMetadata(
                upload_date=utc_now_iso(),
                source="file_upload",
                tags=["business", "strategy"],
                category="general",
            ),
            processed=False,
        )

    @staticmethod
    def document_from_text(
        content: str,
        doc_type: str = "txt",
        filename: Optional[str] = None,
        source: Optional[str] = None,
        tags: Optional[List[str]] = None,
        category: Optional[str] = None,
    ) -> KnowledgeDocument:
        return KnowledgeDocument(
            id=generate_document_id(),
            filename=filename or f"text-content-{int(time.time() * 1000)}.txt",
            type=doc_type,
            size=len(content),
            content=content,
            metadata=DocumentMetadata(
                upload_date=utc_now_iso(),
                source=source or "text_input",
                tags=tags or [],
                category=category or "general",
            ),
            processed=False,
        )


def preview_document(document: KnowledgeDocument, limit: int) -> KnowledgeDocument:
    return document.model_copy(update={"content": truncate_with_ellipsis(document.content, limit)})
