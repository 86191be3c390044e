import time
from datetime import datetime, timezone


def now_ms() -> int:
    """
    Current wall-clock time as epoch milliseconds.
    """
    return int(time.time() * 1000)


def get_utc_now() -> datetime:
    """
    Get current time in UTC.
    """
    return datetime.now(timezone.utc)


def get_utc_timestamp() -> str:
    """
    Get current time in UTC formatted as string.
    Format: YYYY-MM-DD HH:MM:SS+00:00 (e.g. 2025-10-02 14:00:00+00:00)
    """
    return get_utc_now().isoformat(sep=" ", timespec="seconds")
