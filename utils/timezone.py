"""UTC-everywhere time handling. Eliminates timezone bugs at the source."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """
    Today's date in UTC as an ISO string (YYYY-MM-DD).

    Invoice dates are date-only; the day boundary is UTC, not server local.
    """
    return now_utc().date().isoformat()
