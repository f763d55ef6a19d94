from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo); convert aware ones."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def days_between(today: date, when: datetime) -> int:
    """Whole calendar days from ``today`` to ``when``'s UTC date."""
    return (as_utc(when).date() - today).days


def day_window(now: datetime, days_ahead: int) -> tuple[datetime, datetime]:
    today = as_utc(now).date()
    return start_of_day(today), end_of_day(today + timedelta(days=days_ahead))
