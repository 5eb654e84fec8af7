"""Periodic regeneration of insights"""
import asyncio
import logging
from contextlib import suppress
from typing import Callable, Optional, Sequence, Tuple

from finquest_insights.engine import InsightEngine
from finquest_insights.models.profile import MarketContext, Profile, SpendingPattern
from finquest_insights.models.result import GenerationResult

logger = logging.getLogger(__name__)

PassInput = Tuple[Profile, Sequence[SpendingPattern], Optional[MarketContext]]

class AutoRefresher:
    """
    Re-runs the engine on a fixed interval.

    Every pass gets a generation id. Starting a pass cancels any pass still in
    flight, and a result is only delivered if its generation id is still the
    latest, so an older pass can never overwrite a newer one.
    """

    def __init__(
            self,
            engine: InsightEngine,
            provider: Callable[[], PassInput],
            on_result: Optional[Callable[[GenerationResult], None]] = None,
            interval: Optional[float] = None
    ):
        self.engine = engine
        self.provider = provider
        self.on_result = on_result
        self.interval = interval if interval is not None else engine.settings.REFRESH_INTERVAL_SECONDS
        self.latest: Optional[GenerationResult] = None
        self._latest_generation = 0
        self._loop_task: Optional[asyncio.Task] = None
        self._pass_task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def refresh_now(self) -> Optional[GenerationResult]:
        """Run a pass immediately; returns None if a newer pass superseded it"""
        generation_id = self.engine.next_generation_id()
        self._latest_generation = generation_id

        if self._pass_task is not None and not self._pass_task.done():
            self._pass_task.cancel()

        profile, patterns, market = self.provider()
        task = asyncio.ensure_future(
            self.engine.generate_async(profile, patterns, market, generation_id=generation_id)
        )
        self._pass_task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if generation_id == self._latest_generation:
                # Cancelled from outside, not superseded
                raise
            logger.info(f"Generation {generation_id} superseded by {self._latest_generation}")
            return None

        if result.generation_id != self._latest_generation:
            logger.info(f"Discarding stale generation {result.generation_id}")
            return None

        self.latest = result
        if self.on_result:
            self.on_result(result)
        return result

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh_now()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Auto-refresh pass failed: {e}")
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start refreshing; must be called from a running event loop"""
        if self.running:
            return
        self._loop_task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Auto-refresh started, interval {self.interval}s")

    async def stop(self) -> None:
        """Cancel the schedule and any in-flight pass"""
        for task in (self._loop_task, self._pass_task):
            if task is not None and not task.done():
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task
        self._loop_task = None
        self._pass_task = None
        logger.info("Auto-refresh stopped")
