from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Timezone-aware UTC time, serialised as ISO-8601 with offset."""
    return datetime.now(timezone.utc)
