"""
File upload router
"""
import random
import time
from typing import List

from fastapi import APIRouter, File, HTTPException, UploadFile
from loguru import logger

from app.config import settings
from app.schemas.upload import ProcessedFile, SkippedFile, UploadInfoResponse, UploadResponse
from app.services.upload_service import (
    SUPPORTED_FORMATS,
    extract_patterns,
    extract_text,
    rejection_reason,
)
from app.utils import utc_now_iso


router = APIRouter(prefix="/api/upload", tags=["upload"])

CONTENT_PREVIEW_CHARS = 1000


@router.post("", response_model=UploadResponse, response_model_by_alias=True)
async def upload_files(files: List[UploadFile] = File(None)):
    """
    Process uploaded files for learning

    Args:
        files: Files sent in the multipart field ``files``

    Returns:
        UploadResponse with processed and skipped files
    """
    if not files:
        raise HTTPException(status_code=400, detail="No files provided")

    logger.info(f"Received upload request for {len(files)} file(s)")

    processed_files = []
    skipped_files = []

    for file in files:
        file_name = file.filename or "unnamed"

        reason = rejection_reason(file_name, file.content_type, file.size)
        if reason:
            logger.warning(f"Skipping {file_name}: {reason}")
            skipped_files.append(SkippedFile(name=file_name, reason=reason))
            continue

        data = await file.read()
        # size is not always declared on the part
        reason = rejection_reason(file_name, file.content_type, len(data))
        if reason:
            logger.warning(f"Skipping {file_name}: {reason}")
            skipped_files.append(SkippedFile(name=file_name, reason=reason))
            continue

        content = extract_text(file_name, file.content_type, data)
        processed_files.append(
            ProcessedFile(
                id=f"{int(time.time() * 1000)}-{random.randint(0, 999999)}",
                name=file_name,
                type=file.content_type or "application/octet-stream",
                size=len(data),
                upload_date=utc_now_iso(),
                insights=random.randint(50, 249),
                content=content[:CONTENT_PREVIEW_CHARS],
                patterns=extract_patterns(content),
            )
        )
        logger.info("Processed upload", filename=file_name, size=len(data))

    return UploadResponse(
        success=True,
        processed_files=processed_files,
        skipped_files=skipped_files,
        message=f"Successfully processed {len(processed_files)} files",
    )


@router.get("", response_model=UploadInfoResponse, response_model_by_alias=True)
async def upload_info():
    return UploadInfoResponse(
        message="File upload API is ready",
        supported_formats=SUPPORTED_FORMATS,
        max_file_size=f"{settings.UPLOAD_MAX_FILE_SIZE // (1024 * 1024)}MB",
    )
