"""Invitation status rules.

Invitations grant an email address an administrative role on an outlet.
Only ``pending`` and ``accepted`` are ever stored; ``expired`` is derived
from ``expires_at`` when the invitation is read.
"""

from datetime import datetime, timezone
from enum import Enum


class InvitationStatus(str, Enum):
    """Invitation status enum."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"


def ensure_utc(value: datetime) -> datetime:
    """Interpret naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_expired(expires_at: datetime, now: datetime) -> bool:
    """An invitation is expired strictly after its expiry instant."""
    return ensure_utc(now) > ensure_utc(expires_at)


def effective_status(stored_status: str, expires_at: datetime, now: datetime) -> InvitationStatus:
    """Status as seen by clients.

    Args:
        stored_status: Value of the ``status`` column.
        expires_at: Expiry timestamp of the invitation.
        now: Current time.

    Returns:
        ACCEPTED for consumed invitations, EXPIRED for pending ones past
        their expiry, PENDING otherwise.
    """
    if stored_status == InvitationStatus.ACCEPTED.value:
        return InvitationStatus.ACCEPTED
    if is_expired(expires_at, now):
        return InvitationStatus.EXPIRED
    return InvitationStatus.PENDING


def normalize_email(email: str) -> str:
    """Canonical form used when matching invitee addresses."""
    return email.strip().lower()
