from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from databases that drop the offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
