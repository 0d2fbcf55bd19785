from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, PlainSerializer


def format_utc(dt: Optional[datetime]) -> Optional[str]:
    """Format as ISO 8601 with millisecond precision and an explicit 'Z'."""
    if dt is None:
        return None
    # SQLite hands back naive datetimes; everything we store is UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    elif dt.tzinfo != timezone.utc:
        dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


UTCDateTime = Annotated[datetime, PlainSerializer(format_utc, return_type=Optional[str], when_used="json")]


# Response models carrying timestamps inherit from this and annotate them as UTCDateTime
class BaseConfig(BaseModel):
    model_config = ConfigDict(from_attributes=True)
