"""
Custom exceptions for the File Storage API.
Provides specific error types for different failure scenarios.
"""


class FileStorageApiException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(FileStorageApiException):
    """Raised when an upload request or its payload fails validation."""
    pass


class FileTooLargeException(ValidationException):
    """Raised when an uploaded payload exceeds the configured size limit."""
    pass


class FileNotFoundException(FileStorageApiException):
    """Raised when a stored file has no metadata record."""
    pass


class UploadNotFoundException(FileStorageApiException):
    """Raised when an upload id is unknown or its progress record expired."""
    pass


class S3Exception(FileStorageApiException):
    """Raised when S3 operation fails."""
    pass


class DynamoDBException(FileStorageApiException):
    """Raised when DynamoDB operation fails."""
    pass
