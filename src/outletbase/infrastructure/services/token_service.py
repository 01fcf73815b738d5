"""Token generation service.

Provides cryptographically secure random tokens for invitations.
"""

import secrets
import string

URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


class TokenService:
    """Service for generating secure random tokens."""

    @staticmethod
    def generate_token(length: int = 32) -> str:
        """Generate a random identifier of exactly ``length`` characters.

        Characters are drawn from a 64-symbol URL-safe alphabet, giving
        6 bits of entropy per character (192 bits for the default length).

        Args:
            length: Number of characters.

        Returns:
            URL-safe token string.
        """
        if length <= 0:
            raise ValueError("Token length must be positive")
        return "".join(secrets.choice(URL_SAFE_ALPHABET) for _ in range(length))


# Default token service instance
token_service = TokenService()
