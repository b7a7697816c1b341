"""
Expired Session Sweeper

Background job that deletes session records whose expiry has passed.
Storage hygiene only: it never changes the lifecycle state of a live record.
"""

import asyncio
import logging
from datetime import datetime
from typing import AsyncContextManager, Callable

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class ExpiredSessionSweeper:
    """
    Periodically purges expired session records.

    Each sweep opens its own unit of work through ``uow_scope`` so it does
    not share a database session with request handlers.
    """

    def __init__(
        self,
        uow_scope: Callable[[], AsyncContextManager[UnitOfWork]],
        interval_seconds: float = 3600,
        initial_delay_seconds: float = 60,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow_scope = uow_scope
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.clock = clock

    async def sweep_once(self) -> int:
        """Delete every record expired as of now. Returns the number removed."""
        async with self.uow_scope() as uow:
            async with uow:
                count = await uow.session_records.delete_expired(self.clock())
                await uow.commit()

        if count:
            logger.info(f"Cleaned up {count} expired session record(s)")
        else:
            logger.debug("No expired session records found during cleanup")
        return count

    async def run(self):
        """Sweep forever until cancelled. A failed sweep is logged and retried next interval."""
        logger.info(
            f"Expired session sweeper starting (interval: {self.interval_seconds}s)"
        )
        try:
            await asyncio.sleep(self.initial_delay_seconds)
            while True:
                try:
                    await self.sweep_once()
                except Exception:
                    logger.exception("Error while cleaning up expired session records")

                await asyncio.sleep(self.interval_seconds)
        finally:
            logger.info("Expired session sweeper stopping")
