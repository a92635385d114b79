"""
In-memory upload progress registry.

Records live for the lifetime of the process and are removed only by the
retention sweeper. Every mutator is a silent no-op for an unknown id, since
progress updates may race with eviction. Terminal records (completed or failed)
are never changed again.
"""
import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional
from src.models.upload_progress import UploadProgress, UploadState

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProgressStore:
    """Keyed registry of upload progress records."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock
        self._records: Dict[str, UploadProgress] = {}
        self._lock = threading.Lock()

    def start_upload(self, filename: str) -> str:
        """
        Begin tracking a new upload.

        Args:
            filename: Original name of the file

        Returns:
            Fresh upload identifier
        """
        upload_id = str(uuid.uuid4())
        now = self._clock()
        record = UploadProgress(
            id=upload_id,
            filename=filename,
            progress=0,
            status=UploadState.PENDING,
            start_time=now,
            last_update=now
        )
        with self._lock:
            self._records[upload_id] = record
        logger.debug("Tracking upload %s for %s", upload_id, filename)
        return upload_id

    def update_progress(self, upload_id: str, percent: int) -> None:
        """Record a progress percentage; 100 moves the upload to processing."""
        status = UploadState.UPLOADING if percent < 100 else UploadState.PROCESSING
        self._transition(upload_id, progress=percent, status=status)

    def complete_upload(self, upload_id: str) -> None:
        self._transition(upload_id, progress=100, status=UploadState.COMPLETED)

    def fail_upload(self, upload_id: str, error_message: str) -> None:
        self._transition(upload_id, status=UploadState.FAILED, error=error_message)

    def get_progress(self, upload_id: str) -> Optional[UploadProgress]:
        """Return the current record, or None if unknown or evicted."""
        with self._lock:
            return self._records.get(upload_id)

    def evict_stale(self, older_than: datetime) -> int:
        """
        Remove every record last updated before the cutoff, whatever its status.

        Args:
            older_than: Records with last_update strictly before this are removed

        Returns:
            Number of records removed
        """
        with self._lock:
            stale_ids = [
                upload_id for upload_id, record in self._records.items()
                if record.last_update < older_than
            ]
            for upload_id in stale_ids:
                self._records.pop(upload_id, None)
        return len(stale_ids)

    def now(self) -> datetime:
        return self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _transition(self, upload_id: str, **changes) -> None:
        with self._lock:
            record = self._records.get(upload_id)
            if record is None:
                return
            if record.status.is_terminal:
                return
            self._records[upload_id] = replace(record, last_update=self._clock(), **changes)
