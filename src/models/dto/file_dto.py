"""
Data Transfer Objects for the File API.
Defines request and response schemas for API endpoints.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class BeginUploadRequest(BaseModel):
    """Request schema for initializing upload tracking."""
    filename: Optional[str] = Field(default=None, max_length=255, description="Original name of the file to upload")


class BeginUploadResponse(BaseModel):
    """Response schema for a newly tracked upload."""
    upload_id: str = Field(..., description="Identifier used to poll upload progress")
    message: str = Field(..., description="Status message")


class FileResponse(BaseModel):
    """Response schema for a stored file."""
    id: str
    filename: str
    mime_type: str
    size: int
    upload_date: datetime
    upload_id: Optional[str] = None


class FileDetailsResponse(FileResponse):
    """File details, with a short-lived view URL for images."""
    view_url: Optional[str] = None


class FileUploadResponse(BaseModel):
    """Response schema for a completed upload."""
    message: str
    file: FileResponse


class PaginationResponse(BaseModel):
    """Pagination block for list responses."""
    total: int
    page: int
    limit: int
    pages: int


class FileListResponse(BaseModel):
    """Response schema for listing stored files."""
    files: list[FileResponse]
    pagination: PaginationResponse


class UploadProgressResponse(BaseModel):
    """Response schema for upload progress polling."""
    id: str
    filename: str
    progress: int
    status: str
    error: Optional[str] = None
    start_time: datetime
    last_update: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
