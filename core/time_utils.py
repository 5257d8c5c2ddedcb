from datetime import datetime, date

# Local wall-clock format; sortable and prefix-matchable (YYYY-MM-DD, YYYY-MM)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"

DAYS_PER_YEAR = 365.25


def now_local() -> datetime:
    """Return a naive local datetime truncated to the second."""
    return datetime.now().replace(microsecond=0)


def local_timestamp(now: datetime | None = None) -> str:
    """Return the stored timestamp string, e.g. '2026-02-15 10:30:00'."""
    return (now or now_local()).strftime(TIMESTAMP_FORMAT)


def day_prefix(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def month_prefix(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a stored timestamp or ISO date string. Returns None if unreadable."""
    if not value:
        return None
    for fmt in (TIMESTAMP_FORMAT, DATE_FORMAT):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def live_age(stored_age, created_at, now: datetime | None = None):
    """Age as recorded at registration plus the whole years elapsed since.

    Falls back to the stored age when either input is missing or unreadable.
    """
    if stored_age in (None, ""):
        return None
    try:
        age = int(stored_age)
    except (TypeError, ValueError):
        return stored_age

    if isinstance(created_at, str):
        created = parse_timestamp(created_at)
    else:
        created = created_at
    if created is None:
        return age

    elapsed_days = abs(((now or now_local()) - created).total_seconds()) / 86400
    return age + int(elapsed_days // DAYS_PER_YEAR)
