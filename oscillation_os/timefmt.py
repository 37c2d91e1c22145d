from __future__ import annotations
import time
from datetime import datetime

MS_PER_MINUTE = 60_000
MS_PER_DAY = 24 * 60 * MS_PER_MINUTE


def now_ms() -> int:
    return int(time.time() * 1000)


def to_local_datetime(ts: int) -> datetime:
    return datetime.fromtimestamp(ts / 1000)


def day_key(ts: int) -> str:
    """Local calendar day of a ms timestamp as "YYYY-MM-DD"."""
    return to_local_datetime(ts).strftime("%Y-%m-%d")


def format_time(ts: int) -> str:
    return to_local_datetime(ts).strftime("%H:%M")


def format_date_short(ts: int) -> str:
    return to_local_datetime(ts).strftime("%d %b")


def format_header_date(dt: datetime | None = None) -> str:
    dt = dt or datetime.now()
    return dt.strftime("%a, %d %b")
