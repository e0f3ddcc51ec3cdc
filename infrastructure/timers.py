"""
asyncio-backed Timer adapter.

Schedules callbacks on the running event loop with ``loop.call_later``; the
returned ``asyncio.TimerHandle`` cancels the underlying timer.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AsyncioTimer:
    """
    Timer implementation for production use.

    Usage:
        >>> timer = AsyncioTimer()
        >>> handle = timer.call_later(3.0, callback)
        >>> handle.cancel()
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling callback in %.3fs", delay_seconds)
        return loop.call_later(max(0.0, delay_seconds), callback)
