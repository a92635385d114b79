"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from datetime import timedelta
from functools import lru_cache
from src.core import config
from src.repositories.s3_repository import S3Repository
from src.repositories.db_repository import FileMetadataRepository
from src.repositories.dynamo_repository import DynamoFileMetadataRepository
from src.services.file_service import FileService
from src.services.file_validation_service import FileValidationService
from src.services.progress_store import ProgressStore
from src.services.retention_sweeper import RetentionSweeper
from src.services.upload_service import UploadService


@lru_cache()
def get_progress_store() -> ProgressStore:
    """Get the process-wide ProgressStore instance."""
    return ProgressStore()


@lru_cache()
def get_retention_sweeper() -> RetentionSweeper:
    """Get RetentionSweeper bound to the shared progress store."""
    return RetentionSweeper(
        progress_store=get_progress_store(),
        retention=timedelta(hours=config.settings.progress_retention_hours),
        interval_seconds=config.settings.progress_sweep_interval_seconds
    )


@lru_cache()
def get_s3_repository() -> S3Repository:
    """Get S3Repository singleton instance."""
    return S3Repository()


@lru_cache()
def get_metadata_repository() -> FileMetadataRepository:
    """Get FileMetadataRepository singleton instance."""
    return DynamoFileMetadataRepository()


@lru_cache()
def get_validation_service() -> FileValidationService:
    """Get FileValidationService singleton instance."""
    return FileValidationService()


@lru_cache()
def get_upload_service() -> UploadService:
    """Get UploadService singleton instance with injected dependencies."""
    return UploadService(
        progress_store=get_progress_store(),
        s3_repository=get_s3_repository(),
        metadata_repository=get_metadata_repository(),
        validation_service=get_validation_service()
    )


@lru_cache()
def get_file_service() -> FileService:
    """Get FileService singleton instance with injected dependencies."""
    return FileService(
        s3_repository=get_s3_repository(),
        metadata_repository=get_metadata_repository()
    )


def clear_caches() -> None:
    """Drop all cached instances so the next request rebuilds them from settings."""
    for provider in (
        get_progress_store,
        get_retention_sweeper,
        get_s3_repository,
        get_metadata_repository,
        get_validation_service,
        get_upload_service,
        get_file_service,
    ):
        provider.cache_clear()
