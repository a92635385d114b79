"""
Abstract base class for metadata repositories.
Defines the contract for file metadata storage operations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.models.file_metadata import FileMetadata


class FileMetadataRepository(ABC):
    """Abstract repository interface for file metadata operations."""

    @abstractmethod
    def save(self, metadata: FileMetadata) -> None:
        """Persist a single metadata record."""
        pass

    @abstractmethod
    def find_by_id(self, file_id: str) -> Optional[FileMetadata]:
        """Find a metadata record by file id, or None."""
        pass

    @abstractmethod
    def find_page(self, page: int = 1, limit: int = 10) -> Tuple[List[FileMetadata], int]:
        """Return one page of records, newest first, and the total count."""
        pass

    @abstractmethod
    def delete(self, file_id: str) -> None:
        """Delete a metadata record."""
        pass
