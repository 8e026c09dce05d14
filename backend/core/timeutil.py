"""Timezone helpers shared by domain entities and repositories."""

from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on round-trip)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def days_from_now(days: int, now: datetime | None = None) -> datetime:
    """Return ``now + days`` in UTC."""
    return (now or utcnow()) + timedelta(days=days)
