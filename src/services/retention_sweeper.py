"""
Periodic eviction of stale upload progress records.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Optional
from src.services.progress_store import ProgressStore

logger = logging.getLogger(__name__)


class RetentionSweeper:
    """Background task that evicts progress records older than the retention window."""

    def __init__(
        self,
        progress_store: ProgressStore,
        retention: timedelta = timedelta(hours=24),
        interval_seconds: float = 3600
    ):
        self.progress_store = progress_store
        self.retention = retention
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    def sweep(self) -> int:
        """
        Run a single eviction pass.

        Returns:
            Number of records evicted
        """
        cutoff = self.progress_store.now() - self.retention
        evicted = self.progress_store.evict_stale(cutoff)
        if evicted:
            logger.info("Evicted %d stale upload progress record(s)", evicted)
        return evicted

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info(
            "Retention sweeper started (interval=%ss, retention=%s)",
            self.interval_seconds, self.retention
        )

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Retention sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                self.sweep()
            except Exception:
                logger.exception("Retention sweep failed")
