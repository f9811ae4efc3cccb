"""Credential store backed by the ``user`` table."""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from simple_blog.database import get_db
from simple_blog.models.user import User
from simple_blog.services.base import ConflictError

logger = logging.getLogger(__name__)


class CredentialStore:
    """Persists usernames and password hashes.

    The unique constraint on ``user.username`` is the authoritative guard
    against duplicates; callers may look the name up first to show a
    friendlier message.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_username(self, username: str) -> User | None:
        """Return the user with this exact username, if any."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def create(self, username: str, password_hash: str) -> User:
        """Insert a new user.

        Raises:
            ConflictError: If the username is already taken.
        """
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"User '{username}' already exists") from e

        await self.session.refresh(user)
        logger.info("Created user id=%s username=%s", user.id, user.username)
        return user


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    """Dependency that provides a credential store bound to the request session."""
    return CredentialStore(db)
