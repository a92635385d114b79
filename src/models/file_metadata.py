"""
Domain model for stored file metadata.
Database-agnostic representation of a file kept in object storage.
"""
from datetime import datetime, timezone
from typing import Optional


class FileMetadata:
    """Domain model linking an uploaded object to its original file details."""

    def __init__(
        self,
        file_id: str,
        filename: str,
        original_name: str,
        mime_type: str,
        size: int,
        s3_key: str,
        s3_bucket: str,
        upload_id: str,
        upload_date: Optional[datetime] = None
    ):
        self.file_id = file_id
        self.filename = filename
        self.original_name = original_name
        self.mime_type = mime_type
        self.size = size
        self.s3_key = s3_key
        self.s3_bucket = s3_bucket
        self.upload_id = upload_id
        self.upload_date = upload_date or datetime.now(timezone.utc)

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")

    def __repr__(self):
        return f"FileMetadata(file_id={self.file_id}, original_name={self.original_name}, s3_key={self.s3_key})"
