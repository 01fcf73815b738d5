"""Authenticated identity entity.

Identities are issued by the external auth provider; OutletBase only
mirrors the claims it needs (id, email, display name).
"""

from dataclasses import dataclass


@dataclass
class CurrentUser:
    """The user behind the current request.

    Attributes:
        user_id: Identifier assigned by the auth provider.
        email: Verified email address of the user.
        name: Optional display name.
    """

    user_id: str
    email: str
    name: str | None = None

    def __post_init__(self) -> None:
        """Validate identity data after initialization."""
        if not self.user_id:
            raise ValueError("User ID is required")
        if not self.email:
            raise ValueError("Email is required")

    @property
    def display_name(self) -> str:
        """Name to show in emails, falling back to the email address."""
        return self.name or self.email
