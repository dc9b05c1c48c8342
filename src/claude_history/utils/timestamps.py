"""Timestamp parsing and calendar-day bucketing."""

import re
from datetime import datetime, timedelta, timezone

# 2025-11-18T20:16:42.310Z, 2025-11-18T20:16:42+02:00
_INSTANT = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d{1,9}))?"
    r"(Z|[+-]\d{2}:\d{2})$"
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_instant(value) -> int:
    """Parse a strict ISO-8601 instant into epoch milliseconds.

    Anything that is not an instant string returns 0.
    """
    if not isinstance(value, str):
        return 0
    match = _INSTANT.match(value)
    if not match:
        return 0

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    micros = int((fraction or "0").ljust(6, "0")[:6])
    if offset == "Z":
        tz = timezone.utc
    else:
        sign = 1 if offset[0] == "+" else -1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        try:
            tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
        except ValueError:
            return 0
    try:
        dt = datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micros, tzinfo=tz,
        )
    except ValueError:
        return 0
    delta = dt - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000


def day_key(epoch_ms: int) -> str | None:
    """Local calendar date (YYYY-MM-DD) of an epoch-millisecond timestamp.

    Returns None when the value falls outside the platform's date range.
    """
    try:
        return datetime.fromtimestamp(epoch_ms / 1000).strftime("%Y-%m-%d")
    except (ValueError, OverflowError, OSError):
        return None


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)
