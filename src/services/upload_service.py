"""
Upload Service for the upload lifecycle.
Coordinates S3 writes, metadata persistence and progress reporting.
"""
import logging
import uuid
from typing import BinaryIO, Optional
from src.core.exceptions import FileStorageApiException, UploadNotFoundException, ValidationException
from src.models.dto.file_dto import BeginUploadResponse, FileResponse, FileUploadResponse, UploadProgressResponse
from src.models.file_metadata import FileMetadata
from src.repositories.db_repository import FileMetadataRepository
from src.repositories.dynamo_repository import DynamoFileMetadataRepository
from src.repositories.s3_repository import S3Repository
from src.services.file_validation_service import FileValidationService
from src.services.progress_store import ProgressStore

logger = logging.getLogger(__name__)

# Coarse progress checkpoints: object stored, then metadata recorded
STORED_PROGRESS = 50
PERSISTED_PROGRESS = 90


class UploadService:
    """Service driving an upload from begin to completed or failed."""

    def __init__(
        self,
        progress_store: ProgressStore,
        s3_repository: S3Repository = None,
        metadata_repository: FileMetadataRepository = None,
        validation_service: FileValidationService = None
    ):
        self.progress_store = progress_store
        self.s3_repository = s3_repository or S3Repository()
        self.metadata_repository = metadata_repository or DynamoFileMetadataRepository()
        self.validation_service = validation_service or FileValidationService()

    def begin_upload(self, filename: str) -> BeginUploadResponse:
        """
        Start tracking an upload before its bytes are sent.

        Raises:
            ValidationException: If filename is missing
        """
        filename = self.validation_service.validate_filename(filename)
        upload_id = self.progress_store.start_upload(filename)
        logger.info("Upload %s initialized for %s", upload_id, filename)

        return BeginUploadResponse(upload_id=upload_id, message="Upload tracking initialized")

    def upload_file(
        self,
        file: Optional[BinaryIO],
        filename: Optional[str],
        content_type: Optional[str],
        size: int,
        upload_id: Optional[str] = None
    ) -> FileUploadResponse:
        """
        Handle the upload workflow.

        The tracked record ends as completed, or as failed with the cause, before
        any error reaches the caller. When the metadata write fails after the
        object was stored, the object is deleted again.

        Args:
            file: File payload, None if the client sent none
            filename: Original filename
            content_type: MIME type reported by the client
            size: Payload size in bytes
            upload_id: Tracking id from begin_upload, if the client has one

        Returns:
            FileUploadResponse describing the stored file

        Raises:
            ValidationException: If the payload is missing or invalid, or the
                upload id already reached a final state
            S3Exception: If the S3 upload fails
            DynamoDBException: If the metadata write fails
        """
        if upload_id:
            record = self.progress_store.get_progress(upload_id)
            if record is not None and record.status.is_terminal:
                raise ValidationException(
                    f"Upload '{upload_id}' is already {record.status.value}; begin a new upload"
                )

        if file is None:
            self._fail(upload_id, "No file uploaded")
            raise ValidationException("No file uploaded")

        try:
            filename = self.validation_service.validate_upload(filename, content_type, size)
        except ValidationException as e:
            self._fail(upload_id, e.message)
            raise

        tracking_id = upload_id or self.progress_store.start_upload(filename)

        try:
            upload_result = self.s3_repository.upload_file(file, filename, content_type)
            s3_key = upload_result['s3_key']
            self.progress_store.update_progress(tracking_id, STORED_PROGRESS)

            metadata = FileMetadata(
                file_id=str(uuid.uuid4()),
                filename=s3_key,
                original_name=filename,
                mime_type=content_type,
                size=size,
                s3_key=s3_key,
                s3_bucket=upload_result['bucket'],
                upload_id=tracking_id
            )
            try:
                self.metadata_repository.save(metadata)
            except Exception:
                self._delete_orphaned_object(s3_key)
                raise

            self.progress_store.update_progress(tracking_id, PERSISTED_PROGRESS)
            self.progress_store.complete_upload(tracking_id)

        except FileStorageApiException as e:
            self._fail(tracking_id, e.message)
            raise
        except Exception as e:
            self._fail(tracking_id, str(e) or "Upload failed")
            raise

        logger.info("Upload %s completed as %s (%d bytes)", tracking_id, s3_key, size)

        return FileUploadResponse(
            message="File uploaded successfully",
            file=FileResponse(
                id=metadata.file_id,
                filename=metadata.original_name,
                mime_type=metadata.mime_type,
                size=metadata.size,
                upload_date=metadata.upload_date,
                upload_id=tracking_id
            )
        )

    def get_progress(self, upload_id: str) -> UploadProgressResponse:
        """
        Get the current progress of an upload.

        Raises:
            UploadNotFoundException: If the id is unknown or expired
        """
        record = self.progress_store.get_progress(upload_id)

        if record is None:
            raise UploadNotFoundException(f"Upload '{upload_id}' not found")

        return UploadProgressResponse(
            id=record.id,
            filename=record.filename,
            progress=record.progress,
            status=record.status.value,
            error=record.error,
            start_time=record.start_time,
            last_update=record.last_update
        )

    def _fail(self, upload_id: Optional[str], message: str) -> None:
        if not upload_id:
            return
        logger.warning("Upload %s failed: %s", upload_id, message)
        self.progress_store.fail_upload(upload_id, message)

    def _delete_orphaned_object(self, s3_key: str) -> None:
        try:
            self.s3_repository.delete_file(s3_key)
            logger.info("Deleted orphaned object %s after metadata failure", s3_key)
        except Exception:
            logger.exception("Error deleting orphaned object %s from S3", s3_key)
