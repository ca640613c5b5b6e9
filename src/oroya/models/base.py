from datetime import UTC, datetime
from uuid import UUID, uuid4


def utc_now() -> datetime:
    """Return current UTC time as naive datetime.

    SQLite has no timezone-aware type, so we strip tzinfo.
    All times are stored in UTC by convention.
    """
    return datetime.now(UTC).replace(tzinfo=None)


def new_id() -> UUID:
    """Generate a random identifier for a new record.

    Callers pre-generate ids; repositories never create them.
    """
    return uuid4()
