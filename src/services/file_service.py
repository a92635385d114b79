"""
File Service for stored file operations.
Lists, describes, serves and deletes files that completed upload.
"""
import logging
import math
from src.core import config
from src.core.exceptions import FileNotFoundException
from src.models.dto.file_dto import FileDetailsResponse, FileListResponse, FileResponse, PaginationResponse
from src.models.file_metadata import FileMetadata
from src.repositories.db_repository import FileMetadataRepository
from src.repositories.dynamo_repository import DynamoFileMetadataRepository
from src.repositories.s3_repository import S3Repository

logger = logging.getLogger(__name__)


class FileService:
    """Service for stored file operations."""

    def __init__(
        self,
        s3_repository: S3Repository = None,
        metadata_repository: FileMetadataRepository = None
    ):
        self.s3_repository = s3_repository or S3Repository()
        self.metadata_repository = metadata_repository or DynamoFileMetadataRepository()

    def list_files(self, page: int = 1, limit: int = 10) -> FileListResponse:
        """
        Retrieve stored files, newest first.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            FileListResponse with files and pagination details

        Raises:
            DynamoDBException: If query fails
        """
        files, total = self.metadata_repository.find_page(page, limit)

        return FileListResponse(
            files=[self._to_response(metadata) for metadata in files],
            pagination=PaginationResponse(
                total=total,
                page=page,
                limit=limit,
                pages=math.ceil(total / limit)
            )
        )

    def get_download_url(self, file_id: str) -> str:
        """
        Get a presigned download URL for a stored file.

        Raises:
            FileNotFoundException: If no such file
            S3Exception: If URL generation fails
        """
        metadata = self._get_metadata(file_id)
        return self.s3_repository.generate_presigned_url(
            metadata.s3_key,
            expires_in=config.settings.presigned_url_expiration_seconds
        )

    def get_file_details(self, file_id: str) -> FileDetailsResponse:
        """
        Get file details; images also get a short-lived view URL.

        Raises:
            FileNotFoundException: If no such file
        """
        metadata = self._get_metadata(file_id)

        view_url = None
        if metadata.is_image:
            view_url = self.s3_repository.generate_presigned_url(
                metadata.s3_key,
                expires_in=config.settings.presigned_view_expiration_seconds
            )

        return FileDetailsResponse(
            **self._to_response(metadata).model_dump(),
            view_url=view_url
        )

    def delete_file(self, file_id: str) -> None:
        """
        Delete a stored file: the S3 object first, then its metadata.

        Raises:
            FileNotFoundException: If no such file
            S3Exception: If the object delete fails
            DynamoDBException: If the metadata delete fails
        """
        metadata = self._get_metadata(file_id)
        self.s3_repository.delete_file(metadata.s3_key)
        self.metadata_repository.delete(file_id)
        logger.info("Deleted file %s (%s)", file_id, metadata.s3_key)

    def _get_metadata(self, file_id: str) -> FileMetadata:
        metadata = self.metadata_repository.find_by_id(file_id)
        if metadata is None:
            raise FileNotFoundException("File not found")
        return metadata

    def _to_response(self, metadata: FileMetadata) -> FileResponse:
        return FileResponse(
            id=metadata.file_id,
            filename=metadata.original_name,
            mime_type=metadata.mime_type,
            size=metadata.size,
            upload_date=metadata.upload_date,
            upload_id=metadata.upload_id
        )
