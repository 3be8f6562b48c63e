"""
Upload related schemas
"""
from typing import List
from pydantic import BaseModel, Field


class ProcessedFile(BaseModel):
    """Summary of one accepted upload"""
    id: str = Field(..., description="Generated file ID")
    name: str = Field(..., description="Original file name")
    type: str = Field(..., description="Declared MIME type")
    size: int = Field(..., description="File size in bytes")
    upload_date: str = Field(..., alias="uploadDate", description="ISO-8601 upload timestamp")
    status: str = Field(default="processed", description="Processing status")
    insights: int = Field(..., description="Number of insights learned from the file")
    content: str = Field(..., description="First 1000 characters of extracted content")
    patterns: List[str] = Field(default_factory=list, description="Detected communication patterns")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "1718000000000-4821",
                "name": "notes.txt",
                "type": "text/plain",
                "size": 2048,
                "uploadDate": "2025-01-01T00:00:00.000Z",
                "status": "processed",
                "insights": 128,
                "content": "Meeting with finance at 10:30 AM...",
                "patterns": ["Time references found (1 instances)"]
            }
        }


class SkippedFile(BaseModel):
    """Upload rejected by type or size validation"""
    name: str = Field(..., description="Original file name")
    reason: str = Field(..., description="Why the file was skipped")


class UploadResponse(BaseModel):
    """Upload response schema"""
    success: bool = Field(..., description="Whether the request was processed")
    processed_files: List[ProcessedFile] = Field(..., alias="processedFiles", description="Accepted files")
    skipped_files: List[SkippedFile] = Field(default_factory=list, alias="skippedFiles", description="Rejected files")
    message: str = Field(..., description="Response message")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "success": True,
                "processedFiles": [],
                "skippedFiles": [{"name": "video.mp4", "reason": "Unsupported file type: video/mp4"}],
                "message": "Successfully processed 0 files"
            }
        }


class UploadInfoResponse(BaseModel):
    message: str
    supported_formats: List[str] = Field(..., alias="supportedFormats")
    max_file_size: str = Field(..., alias="maxFileSize")

    class Config:
        populate_by_name = True
