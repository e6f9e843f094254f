"""
Fixed-delay pacing between sequential collaborator calls.
"""

from __future__ import annotations

import time
from collections.abc import Callable


class SequentialPacer:
    """
    Sleeps a fixed delay after each item of a sequential run.

    The delay is the only backpressure applied to the rendering collaborator;
    one pacer belongs to one run, so no locking is needed.
    """

    def __init__(self, *, sleep: Callable[[float], None] = time.sleep) -> None:
        self._sleep = sleep
        self.total_paused_seconds = 0.0

    def pause(self, seconds: float) -> None:
        if seconds <= 0:
            return
        self._sleep(seconds)
        self.total_paused_seconds += seconds
