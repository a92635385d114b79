"""
File Validation Service for upload requests.
Checks filenames, content types, extensions and payload size.
"""
import re
from typing import Dict, List, Optional
from src.core import config
from src.core.exceptions import FileTooLargeException, ValidationException

EXTENSION_PATTERN = re.compile(r"\.[0-9a-z]+$")


class FileValidationService:
    """Service for upload validation rules."""

    ALLOWED_FILE_TYPES: Dict[str, List[str]] = {
        # Images
        'image/jpeg': ['.jpg', '.jpeg'],
        'image/png': ['.png'],
        'image/gif': ['.gif'],
        # Documents
        'application/pdf': ['.pdf'],
        'text/plain': ['.txt'],
        'application/json': ['.json'],
        # Archives
        'application/zip': ['.zip']
    }

    def __init__(self, max_file_size_bytes: Optional[int] = None):
        self.max_file_size_bytes = max_file_size_bytes or config.settings.max_file_size_bytes

    def validate_filename(self, filename: Optional[str]) -> str:
        """
        Validate and normalize a client-supplied filename.

        Raises:
            ValidationException: If filename is missing or blank
        """
        if not filename or not filename.strip():
            raise ValidationException("Filename is required")
        return filename.strip()

    def validate_upload(self, filename: str, content_type: Optional[str], size: int) -> str:
        """
        Validate an uploaded file against the type whitelist and size limit.

        Args:
            filename: Original filename
            content_type: MIME type reported by the client
            size: Payload size in bytes

        Returns:
            The normalized filename

        Raises:
            ValidationException: If type or extension is not allowed
            FileTooLargeException: If the payload exceeds the size limit
        """
        filename = self.validate_filename(filename)

        allowed_extensions = self.ALLOWED_FILE_TYPES.get(content_type or '')
        if allowed_extensions is None:
            raise ValidationException("File type not allowed")

        extension_match = EXTENSION_PATTERN.search(filename.lower())
        if not extension_match:
            raise ValidationException("Invalid file name")

        if extension_match.group(0) not in allowed_extensions:
            raise ValidationException("File extension does not match content type")

        if size > self.max_file_size_bytes:
            raise FileTooLargeException(
                f"File size ({size / (1024 * 1024):.2f}MB) exceeds maximum allowed size of "
                f"{self.max_file_size_bytes / (1024 * 1024):.0f}MB"
            )

        return filename
