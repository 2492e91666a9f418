"""Small formatting and URI helpers."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def format_duration(seconds: float | timedelta) -> str:
    """Format a duration as ``minutes:seconds`` with two-digit seconds."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    secs = math.trunc(seconds)
    minutes, rest = divmod(abs(secs), 60)
    if secs < 0:
        minutes, rest = -minutes, -rest
    return f"{minutes}:{rest:02}"


def map_join(items: Iterable[T], key: Callable[[T], str], sep: str) -> str:
    """Join the strings produced by ``key``, skipping the separator while nothing is joined yet."""
    result = ""
    for item in items:
        part = key(item)
        result = f"{result}{sep}{part}" if result else result + part
    return result


def parse_uri(uri: str) -> str:
    """Turn a ``spotify:user:{user}:{type}:{id}`` URI into ``spotify:{type}:{id}``."""
    parts = uri.split(":")
    if len(parts) == 5:
        return ":".join((parts[0], parts[3], parts[4]))
    return uri