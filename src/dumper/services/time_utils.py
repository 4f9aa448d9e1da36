from __future__ import annotations

from datetime import datetime

from src.app.core.constants import DUMP_TIME_FMT


def dump_timestamp(now: datetime | None = None) -> str:
    """Локальное время в формате 20060102-150405 (сортируется как строка)."""
    return (now or datetime.now()).strftime(DUMP_TIME_FMT)
