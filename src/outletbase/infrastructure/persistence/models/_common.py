"""Column helpers shared by the models."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware current time used for Python-side column defaults."""
    return datetime.now(timezone.utc)
