"""
Upload Progress domain model.
Represents the lifecycle state of a single file upload.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class UploadState(str, Enum):
    """Lifecycle states of an upload."""
    PENDING = "pending"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.COMPLETED, UploadState.FAILED)


@dataclass(frozen=True)
class UploadProgress:
    """
    Snapshot of an upload's progress.

    Instances are immutable; the progress store replaces a record on every
    transition.
    """
    id: str
    filename: str
    progress: int
    status: UploadState
    start_time: datetime
    last_update: datetime
    error: Optional[str] = None
