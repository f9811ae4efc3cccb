"""Post ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simple_blog.database import Base

if TYPE_CHECKING:
    from simple_blog.models.user import User


class Post(Base):
    """A blog post owned by the user who created it."""

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(index=True)
    title: Mapped[str] = mapped_column(Text)
    body: Mapped[str] = mapped_column(Text)
    # Nullable so a post survives its author (left-join semantics on display)
    author_id: Mapped[int | None] = mapped_column(ForeignKey("user.id"), index=True)

    # Relationships
    author: Mapped[User | None] = relationship(back_populates="posts")

    @property
    def author_username(self) -> str | None:
        """Username of the author, or None if the author no longer exists."""
        return self.author.username if self.author else None
