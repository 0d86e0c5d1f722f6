"""Timestamp formatting shared by all collectors."""

import re
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"

TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} [+-]\d{4}$")


def format_timestamp(value: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS +HHMM`` in the build host's local zone.

    Naive datetimes are taken to be local time.

    Example:
        >>> from datetime import timezone, timedelta
        >>> dt = datetime(2019, 1, 19, 1, 0, 52, tzinfo=timezone(timedelta(hours=8)))
        >>> TIMESTAMP_PATTERN.match(format_timestamp(dt)) is not None
        True
    """
    return value.astimezone().strftime(TIMESTAMP_FORMAT)


def now_local() -> datetime:
    """Current time, timezone-aware in the local zone."""
    return datetime.now().astimezone()
