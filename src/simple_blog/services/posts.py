"""Post store backed by the ``post`` table.

No method here checks who is calling. Routes fetch the post, run the
ownership check and only then call :meth:`PostStore.update` or
:meth:`PostStore.delete`.
"""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from simple_blog.database import get_db
from simple_blog.models.post import Post

logger = logging.getLogger(__name__)


class PostStore:
    """Create, read, update and delete posts."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, title: str, body: str, author_id: int) -> Post:
        """Insert a post stamped with the current time."""
        post = Post(
            title=title,
            body=body,
            author_id=author_id,
            created_at=datetime.now(UTC),
        )
        self.session.add(post)
        await self.session.flush()
        await self.session.refresh(post)
        logger.info("Created post id=%s author_id=%s", post.id, author_id)
        return post

    async def get_by_id(self, post_id: int) -> Post | None:
        """Fetch a post with its author loaded (author may be None)."""
        query = select(Post).where(Post.id == post_id).options(selectinload(Post.author))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_by_author(self, author_id: int) -> Sequence[Post]:
        """List an author's posts, newest first."""
        query = (
            select(Post)
            .where(Post.author_id == author_id)
            .options(selectinload(Post.author))
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def update(self, post_id: int, title: str, body: str) -> None:
        """Replace a post's title and body."""
        await self.session.execute(
            update(Post).where(Post.id == post_id).values(title=title, body=body)
        )
        logger.info("Updated post id=%s", post_id)

    async def delete(self, post_id: int) -> None:
        """Remove a post."""
        await self.session.execute(delete(Post).where(Post.id == post_id))
        logger.info("Deleted post id=%s", post_id)


def get_post_store(db: AsyncSession = Depends(get_db)) -> PostStore:
    """Dependency that provides a post store bound to the request session."""
    return PostStore(db)
