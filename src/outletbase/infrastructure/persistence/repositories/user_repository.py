"""User repository for database operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.infrastructure.persistence.models import UserModel


class UserRepository:
    """Repository for mirrored auth-provider identities."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def get_by_id(self, user_id: str) -> UserModel | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def ensure(self, user_id: str, email: str, name: str | None = None) -> UserModel:
        """Insert the identity or refresh its email/name from the latest claims.

        Args:
            user_id: Auth-provider user ID.
            email: Email address from the token.
            name: Optional display name from the token.

        Returns:
            The stored user model (flushed, not committed).
        """
        user = await self.get_by_id(user_id)
        if user is None:
            user = UserModel(id=user_id, email=email, name=name)
            self.session.add(user)
        else:
            user.email = email
            if name:
                user.name = name
        await self.session.flush()
        return user
