# src/services/dates.py

"""Calendar-day derivation shared by every same-day comparison."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from src.config.settings import Settings


def get_date(timestamp: int, tz_name: str | None = None) -> str:
    """Return the ``YYYY-MM-DD`` day of a millisecond epoch timestamp.

    The day is taken in ``Settings.TIMEZONE`` unless *tz_name* is given.
    Stored and freshly observed timestamps must both go through here.
    """
    zone = ZoneInfo(tz_name or Settings.TIMEZONE)
    moment = datetime.fromtimestamp(timestamp / 1000, tz=zone)
    return moment.strftime(Settings.DATE_FORMAT)


def to_utc_iso(timestamp: int) -> str:
    """Format a millisecond epoch timestamp as ISO-8601 in UTC."""
    moment = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="seconds")


def now_timestamp() -> int:
    """Current time as milliseconds since the Unix epoch."""
    return int(datetime.now(tz=timezone.utc).timestamp() * 1000)
