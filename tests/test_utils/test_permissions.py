"""Tests for identity resolution, the login gate and the ownership check."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from simple_blog.models.post import Post
from simple_blog.schemas.session import SessionIdentity
from simple_blog.services.base import AuthorizationFailure
from simple_blog.utils.permissions import (
    ensure_owner,
    is_author,
    require_identity,
    resolve_identity,
)
from simple_blog.utils.security import SessionTokenCodec

SECRET = "fixture-secret-key-that-is-at-least-32-chars"


def create_identity(user_id: int = 1, username: str = "alice1") -> SessionIdentity:
    return SessionIdentity(
        user_id=user_id,
        username=username,
        expires_at=datetime.now(UTC) + timedelta(hours=1),
    )


def create_mock_post(id: int = 10, author_id: int | None = 1) -> MagicMock:
    """Create a mock Post object."""
    mock_post = MagicMock(spec=Post)
    mock_post.id = id
    mock_post.author_id = author_id
    return mock_post


class TestResolveIdentity:
    """Tests for resolve_identity."""

    def test_valid_token(self) -> None:
        codec = SessionTokenCodec(SECRET)

        identity = resolve_identity(codec.issue(5, "carol3"), codec)

        assert identity is not None
        assert identity.user_id == 5
        assert identity.username == "carol3"

    def test_missing_token(self) -> None:
        assert resolve_identity(None, SessionTokenCodec(SECRET)) is None
        assert resolve_identity("", SessionTokenCodec(SECRET)) is None

    def test_bad_tokens_are_swallowed(self) -> None:
        codec = SessionTokenCodec(SECRET)
        expired = codec.issue(5, "carol3", now=datetime.now(UTC) - timedelta(days=3))

        assert resolve_identity("garbage", codec) is None
        assert resolve_identity(expired, codec) is None


class TestRequireIdentity:
    """Tests for the login gate."""

    def test_passes_identity_through(self) -> None:
        identity = create_identity()
        assert require_identity(identity) is identity

    def test_anonymous_rejected(self) -> None:
        with pytest.raises(AuthorizationFailure):
            require_identity(None)


class TestEnsureOwner:
    """Tests for the ownership check."""

    def test_owner_allowed(self) -> None:
        post = create_mock_post(author_id=1)
        assert ensure_owner(post, create_identity(user_id=1)) is post

    def test_other_user_rejected(self) -> None:
        with pytest.raises(AuthorizationFailure):
            ensure_owner(create_mock_post(author_id=1), create_identity(user_id=2))

    def test_missing_post_rejected_like_other_user(self) -> None:
        with pytest.raises(AuthorizationFailure):
            ensure_owner(None, create_identity(user_id=1))

    def test_orphaned_post_rejected(self) -> None:
        with pytest.raises(AuthorizationFailure):
            ensure_owner(create_mock_post(author_id=None), create_identity(user_id=1))


class TestIsAuthor:
    """Tests for is_author."""

    def test_author(self) -> None:
        assert is_author(create_mock_post(author_id=1), create_identity(user_id=1))

    def test_other_user(self) -> None:
        assert not is_author(create_mock_post(author_id=1), create_identity(user_id=2))

    def test_anonymous(self) -> None:
        assert not is_author(create_mock_post(author_id=1), None)
