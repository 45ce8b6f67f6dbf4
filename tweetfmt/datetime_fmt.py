from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidTimezoneError


def validate_timezone(timezone: str) -> ZoneInfo:
    name = (timezone or "").strip()
    if not name:
        raise InvalidTimezoneError(timezone)
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(timezone) from e


def to_datetime(timestamp: int, timezone: str) -> datetime:
    """Convert unix seconds to an aware datetime in the named zone."""
    return datetime.fromtimestamp(int(timestamp), tz=validate_timezone(timezone))
