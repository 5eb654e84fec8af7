"""Clocks and insight id generation"""
import itertools
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]
IdGenerator = Callable[[], str]

def system_clock() -> datetime:
    """Current UTC time"""
    return datetime.now(timezone.utc)

class FixedClock:
    """Clock that only moves when told to; used for reproducible passes"""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now

class SequentialIdGenerator:
    """
    Produces ``<prefix>-<counter>-<millis>`` ids.

    The counter makes ids unique within a pass even when the clock does not
    move; the millisecond stamp keeps ids from different passes apart.
    """

    def __init__(self, clock: Clock = system_clock, prefix: str = "insight"):
        self.clock = clock
        self.prefix = prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            number = next(self._counter)
        millis = int(self.clock().timestamp() * 1000)
        return f"{self.prefix}-{number}-{millis}"
