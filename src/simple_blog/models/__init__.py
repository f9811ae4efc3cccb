"""SQLAlchemy ORM models."""

from simple_blog.models.post import Post
from simple_blog.models.user import User

__all__ = [
    "Post",
    "User",
]
