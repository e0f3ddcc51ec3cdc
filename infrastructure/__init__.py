"""
Infrastructure Layer for the workout draft engine.

Concrete implementations of application ports:
- timers: asyncio event-loop Timer
"""

from infrastructure.timers import AsyncioTimer

__all__ = [
    "AsyncioTimer",
]
