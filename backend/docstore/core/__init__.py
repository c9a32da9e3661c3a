from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime.

    MongoDB stores datetimes as UTC; every create_date stamp written by the
    store goes through here so copies made in one call are comparable.
    """
    return datetime.now(timezone.utc)
