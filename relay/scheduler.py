"""
Periodic driver for replication loops.

Runs a background task that executes one replication cycle per loop every
UPDATE_INTERVAL seconds.
"""

import asyncio
import logging
from typing import List, Optional

from relay.config import UPDATE_INTERVAL
from relay.replication_loop import ReplicationLoop

logger = logging.getLogger(__name__)


class ReplicationScheduler:
    """
    Ticks one or more replication loops at a fixed interval.

    Cycles never await, so a tick always runs to completion.
    """

    def __init__(self, loops: List[ReplicationLoop], interval: Optional[float] = None):
        """
        Initialize the scheduler.

        Args:
            loops: Replication loops to tick, in order
            interval: Seconds between ticks (default: UPDATE_INTERVAL)
        """
        self.loops = loops
        self.interval = UPDATE_INTERVAL if interval is None else interval
        self.task: Optional[asyncio.Task] = None
        self.running = False
        self.ticks = 0

    async def start(self):
        """Start the tick background task."""
        if self.running:
            logger.warning("Replication scheduler already running")
            return

        self.running = True
        self.task = asyncio.create_task(self._tick_loop())
        logger.info(
            f"Replication scheduler started [interval={self.interval:.3f}s, loops={len(self.loops)}]"
        )

    async def stop(self):
        """Stop the tick background task."""
        if not self.running:
            return

        self.running = False

        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass

        logger.info("Replication scheduler stopped")

    def tick(self) -> None:
        """Run one cycle on every loop; a failing loop does not stop the others."""
        for loop in self.loops:
            try:
                loop.run_cycle()
            except Exception as e:
                logger.error(f"Error in replication cycle: {e}", exc_info=True)
        self.ticks += 1

    async def _tick_loop(self):
        """
        Main scheduler loop.

        Executes a tick every interval seconds.
        """
        while self.running:
            self.tick()
            await asyncio.sleep(self.interval)
