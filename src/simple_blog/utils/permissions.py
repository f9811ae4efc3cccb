"""Request identity, the login gate and the post ownership check."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from simple_blog.models.post import Post
from simple_blog.schemas.session import SessionIdentity
from simple_blog.services.base import AuthorizationFailure, InvalidTokenError
from simple_blog.utils.security import SessionTokenCodec

logger = logging.getLogger(__name__)


def resolve_identity(token: str | None, codec: SessionTokenCodec) -> SessionIdentity | None:
    """Turn a session cookie value into an identity.

    Never raises: a missing, tampered, malformed or expired token yields None.
    """
    if not token:
        return None
    try:
        return codec.verify(token)
    except InvalidTokenError as e:
        logger.debug("Treating request as anonymous: %s", e)
        return None


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Annotates every request with ``request.state.identity``.

    The identity is None for anonymous requests; the middleware never blocks.
    """

    def __init__(self, app: ASGIApp, codec: SessionTokenCodec, cookie_name: str) -> None:
        super().__init__(app)
        self.codec = codec
        self.cookie_name = cookie_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.identity = resolve_identity(request.cookies.get(self.cookie_name), self.codec)
        return await call_next(request)


def get_identity(request: Request) -> SessionIdentity | None:
    """Get the identity the authentication middleware attached, if any."""
    return getattr(request.state, "identity", None)


def require_identity(
    identity: Annotated[SessionIdentity | None, Depends(get_identity)],
) -> SessionIdentity:
    """Login gate: pass the identity through or redirect to the landing page.

    Raises:
        AuthorizationFailure: If the request is anonymous.
    """
    if identity is None:
        raise AuthorizationFailure("Login required")
    return identity


def ensure_owner(post: Post | None, identity: SessionIdentity) -> Post:
    """Ownership check run before every post mutation.

    A missing post is handled exactly like a post owned by someone else.

    Raises:
        AuthorizationFailure: If the post is missing or not authored by the identity.
    """
    if post is None:
        logger.info("User %s targeted a missing post", identity.user_id)
        raise AuthorizationFailure("Post not found")
    if post.author_id != identity.user_id:
        logger.info("User %s denied access to post %s", identity.user_id, post.id)
        raise AuthorizationFailure("Not the author of this post")
    return post


def is_author(post: Post, identity: SessionIdentity | None) -> bool:
    """Whether the viewer wrote this post (controls edit/delete links)."""
    return identity is not None and post.author_id == identity.user_id


# Type aliases for use in route dependencies
OptionalIdentity = Annotated[SessionIdentity | None, Depends(get_identity)]
CurrentIdentity = Annotated[SessionIdentity, Depends(require_identity)]
