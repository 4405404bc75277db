from datetime import datetime, timezone


def utcnow() -> datetime:
    """Application-side timestamp; keeps ordering stable on stores with second-resolution now()."""
    return datetime.now(timezone.utc)
