"""UTC helpers. Relational providers may hand back naive datetimes."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


# Sort key for records without a timestamp.
EPOCH = datetime.min.replace(tzinfo=UTC)
