"""
File API routes.
Handles HTTP endpoints for uploads, upload progress and stored files.
"""
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import RedirectResponse
from src.core.dependencies import get_file_service, get_upload_service
from src.models.dto.file_dto import (
    BeginUploadRequest,
    BeginUploadResponse,
    FileDetailsResponse,
    FileListResponse,
    FileUploadResponse,
    MessageResponse,
    UploadProgressResponse
)
from src.services.file_service import FileService
from src.services.upload_service import UploadService
from src.core import config

router = APIRouter(prefix="/v1/api")


@router.post("/files/begin", tags=["Uploads"], response_model=BeginUploadResponse)
async def begin_upload(
    request: BeginUploadRequest,
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Initialize progress tracking for an upload.

    The returned upload_id is sent with the file and used to poll progress.
    """
    return upload_service.begin_upload(request.filename)


@router.post("/files", tags=["Uploads"], response_model=FileUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Optional[UploadFile] = File(None, description="File to store"),
    upload_id: Optional[str] = Form(None, description="Tracking id from /files/begin"),
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Upload a file to S3 and record its metadata.
    """
    if file is None:
        return upload_service.upload_file(None, None, None, 0, upload_id=upload_id or None)

    content = await file.read()
    await file.seek(0)

    return upload_service.upload_file(
        file.file,
        file.filename,
        file.content_type,
        len(content),
        upload_id=upload_id or None
    )


@router.get("/files/progress/{upload_id}", tags=["Uploads"], response_model=UploadProgressResponse)
async def get_upload_progress(
    upload_id: str,
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Get the current progress of an upload.
    """
    return upload_service.get_progress(upload_id)


@router.get("/files", tags=["Files"], response_model=FileListResponse)
async def list_files(
    page: int = Query(default=1, ge=1, description="Page number"),
    limit: int = Query(
        default=config.settings.pagination_default_limit,
        ge=1,
        le=config.settings.pagination_max_limit,
        description="Maximum number of items per page"
    ),
    file_service: FileService = Depends(get_file_service)
):
    """
    List stored files, newest first.

    - **page**: Page number (default 1)
    - **limit**: Items per page
    """
    return file_service.list_files(page, limit)


@router.get("/files/{file_id}", tags=["Files"], status_code=status.HTTP_302_FOUND)
async def download_file(
    file_id: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Redirect to a presigned S3 URL so the client downloads directly from S3.
    """
    url = file_service.get_download_url(file_id)
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/files/{file_id}/details", tags=["Files"], response_model=FileDetailsResponse)
async def get_file_details(
    file_id: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Get file details, including a temporary view URL for images.
    """
    return file_service.get_file_details(file_id)


@router.delete("/files/{file_id}", tags=["Files"], response_model=MessageResponse)
async def delete_file(
    file_id: str,
    file_service: FileService = Depends(get_file_service)
):
    """
    Delete a stored file and its metadata.
    """
    file_service.delete_file(file_id)
    return MessageResponse(message="File deleted successfully")
