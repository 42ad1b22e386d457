from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp for created/updated columns."""
    return datetime.now(timezone.utc)
