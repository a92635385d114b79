"""
Core configuration for the File Storage API.
Manages environment variables and AWS service settings.
"""
import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    s3_bucket_name: str = os.getenv("S3_BUCKET_NAME", "")
    file_metadata_table_name: str = os.getenv("FILE_METADATA_TABLE_NAME", "")

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "File Storage API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # File Upload Limits
    max_file_size_mb: int = int(os.getenv("MAX_FILE_SIZE_MB", "10"))

    # Presigned URL lifetimes
    presigned_url_expiration_seconds: int = int(os.getenv("PRESIGNED_URL_EXPIRATION_SECONDS", "3600"))
    presigned_view_expiration_seconds: int = int(os.getenv("PRESIGNED_VIEW_EXPIRATION_SECONDS", "600"))

    # Upload progress retention
    progress_retention_hours: int = int(os.getenv("PROGRESS_RETENTION_HOURS", "24"))
    progress_sweep_interval_seconds: int = int(os.getenv("PROGRESS_SWEEP_INTERVAL_SECONDS", "3600"))

    # Pagination Configuration
    pagination_default_limit: int = int(os.getenv("PAGINATION_DEFAULT_LIMIT", "10"))
    pagination_max_limit: int = int(os.getenv("PAGINATION_MAX_LIMIT", "100"))

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
