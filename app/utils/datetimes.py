from datetime import datetime, timezone
from typing import Optional


def as_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    DateTime columns are naive UTC and compared against datetime.utcnow();
    offset-aware input is shifted to UTC before the offset is dropped.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
