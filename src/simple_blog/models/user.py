"""User ORM model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from simple_blog.database import Base

if TYPE_CHECKING:
    from simple_blog.models.post import Post


class User(Base):
    """Registered author account."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(10), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))

    # Relationships
    posts: Mapped[list[Post]] = relationship(back_populates="author")
