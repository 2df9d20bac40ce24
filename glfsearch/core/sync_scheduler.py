import asyncio
import logging
from typing import Any, Optional

from glfsearch.core.glf_client import GLFClient
from glfsearch.models.preferences import parse_positive_int

logger = logging.getLogger(__name__)


class SyncScheduler:
    """
    Periodic background `glf --sync --full`.

    Failures are logged and never surfaced: the user did not start this
    sync and gets another chance on the next tick or via "Sync Projects".
    Holds no results and never triggers a search.
    """

    def __init__(self, client: GLFClient, interval_minutes: Any):
        self.client = client
        self.interval_minutes: Optional[int] = parse_positive_int(interval_minutes)
        self.period: Optional[float] = self.interval_minutes * 60.0 if self.interval_minutes else None
        self._task: Optional[asyncio.Task] = None
        self.runs = 0
        self.failures = 0

    @property
    def enabled(self) -> bool:
        return self.period is not None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        if not self.enabled:
            logger.info("Background sync disabled (interval is 0 or invalid)")
            return False
        if self.running:
            return True
        self._task = asyncio.get_running_loop().create_task(self._loop())
        logger.info(f"Background sync scheduled every {self.interval_minutes} min")
        return True

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def run_once(self) -> bool:
        self.runs += 1
        try:
            logger.info("Background sync started")
            await self.client.sync()
        except Exception as e:
            self.failures += 1
            logger.error(f"Background sync failed: {e}")
            return False
        logger.info("Background sync completed")
        return True

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.period)
            await self.run_once()
