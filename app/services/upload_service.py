"""
Upload processing: type/size validation, text decoding and pattern extraction
"""
import json
from typing import List, Optional

import regex
from loguru import logger

from app.config import settings


ALLOWED_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
    "application/json",
    "text/csv",
}

SUPPORTED_FORMATS = [
    "PDF Documents (.pdf)",
    "Word Documents (.doc, .docx)",
    "Excel Spreadsheets (.xls, .xlsx)",
    "Text Files (.txt)",
    "JSON Data (.json)",
    "CSV Files (.csv)",
]

EMAIL_PATTERN = regex.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b")
TIME_PATTERN = regex.compile(r"\b(\d{1,2}):(\d{2})\s*(AM|PM|am|pm)?\b")
MEETING_KEYWORDS = ["meeting", "call", "conference", "discussion", "presentation"]
PROFESSIONAL_WORDS = ["regards", "sincerely", "best", "thank you", "please", "kindly"]

MAX_PATTERNS = 5


def rejection_reason(filename: str, content_type: Optional[str], size: Optional[int]) -> Optional[str]:
    """Return why a file is skipped, or None when it is accepted"""
    if content_type not in ALLOWED_MIME_TYPES and not filename.endswith(".txt"):
        return f"Unsupported file type: {content_type or 'unknown'}"
    if size is not None and size > settings.UPLOAD_MAX_FILE_SIZE:
        return f"File exceeds the {settings.UPLOAD_MAX_FILE_SIZE // (1024 * 1024)}MB limit"
    return None


def extract_text(filename: str, content_type: Optional[str], data: bytes) -> str:
    """Decode text-like formats; binary formats get placeholder text"""
    name = filename.lower()
    try:
        if name.endswith(".txt") or content_type == "text/plain":
            return data.decode("utf-8", errors="replace")

        if name.endswith(".json") or content_type == "application/json":
            parsed = json.loads(data.decode("utf-8", errors="replace"))
            return json.dumps(parsed, indent=2, ensure_ascii=False)

        if name.endswith(".csv") or content_type == "text/csv":
            return data.decode("utf-8", errors="replace")

        return (
            f"Content extracted from {filename}. This is a demo extraction showing how RockstarAI "
            "processes and learns from your documents. In production, this would contain the actual "
            "file content parsed using appropriate libraries for PDF, Word, Excel, and other formats."
        )
    except (ValueError, RecursionError) as e:
        logger.error(f"File processing error for {filename}: {e}")
        return f"Error processing {filename}: {e}"


def _count_terms(content: str, terms: List[str]) -> int:
    return sum(
        len(regex.findall(regex.escape(term), content, flags=regex.IGNORECASE))
        for term in terms
    )


def extract_patterns(content: str) -> List[str]:
    patterns = []

    emails = EMAIL_PATTERN.findall(content)
    if emails:
        patterns.append(f"Email communication pattern detected ({len(emails)} addresses)")

    times = TIME_PATTERN.findall(content)
    if times:
        patterns.append(f"Time references found ({len(times)} instances)")

    meeting_count = _count_terms(content, MEETING_KEYWORDS)
    if meeting_count:
        patterns.append(f"Meeting-related content detected ({meeting_count} references)")

    professional_count = _count_terms(content, PROFESSIONAL_WORDS)
    if professional_count:
        patterns.append(f"Professional communication style ({professional_count} formal expressions)")

    return patterns[:MAX_PATTERNS]
