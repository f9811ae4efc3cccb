"""Pydantic schemas for session data."""

from simple_blog.schemas.session import SessionClaims, SessionIdentity

__all__ = [
    "SessionClaims",
    "SessionIdentity",
]
