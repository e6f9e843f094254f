"""
Structured logging helpers for discovery and analysis runs.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True, ensure_ascii=False))


@contextmanager
def elapsed_ms() -> Iterator[dict[str, int]]:
    """
    Measure a block and expose the duration as `timer["elapsed_ms"]` on exit.
    """

    timer = {"elapsed_ms": 0}
    started = time.monotonic()
    try:
        yield timer
    finally:
        timer["elapsed_ms"] = int((time.monotonic() - started) * 1000)
