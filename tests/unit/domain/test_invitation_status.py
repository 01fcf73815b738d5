"""Unit tests for invitation status rules."""

from datetime import datetime, timedelta, timezone

from outletbase.domain.entities import (
    InvitationStatus,
    effective_status,
    ensure_utc,
    is_expired,
    normalize_email,
)

T0 = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_naive_datetimes_are_treated_as_utc():
    naive = datetime(2026, 3, 1, 12, 0)
    assert ensure_utc(naive) == T0


def test_not_expired_at_the_expiry_instant():
    assert is_expired(T0, T0) is False


def test_expired_one_second_after():
    assert is_expired(T0, T0 + timedelta(seconds=1)) is True


def test_expiry_compares_naive_and_aware_values():
    assert is_expired(datetime(2026, 3, 1, 12, 0), T0 + timedelta(seconds=1)) is True


def test_effective_status_pending():
    assert effective_status("pending", T0, T0 - timedelta(days=1)) == InvitationStatus.PENDING


def test_effective_status_expired_when_pending_past_expiry():
    assert effective_status("pending", T0, T0 + timedelta(days=1)) == InvitationStatus.EXPIRED


def test_effective_status_accepted_wins_over_expiry():
    assert effective_status("accepted", T0, T0 + timedelta(days=30)) == InvitationStatus.ACCEPTED


def test_normalize_email():
    assert normalize_email("  Admin@Example.COM ") == "admin@example.com"
