"""Business logic: stores, validation and domain errors."""

from simple_blog.services.base import (
    AuthorizationFailure,
    BlogError,
    ConflictError,
    InvalidTokenError,
)
from simple_blog.services.posts import PostStore, get_post_store
from simple_blog.services.users import CredentialStore, get_credential_store
from simple_blog.services.validation import FormError, validate_post, validate_registration

__all__ = [
    "AuthorizationFailure",
    "BlogError",
    "ConflictError",
    "InvalidTokenError",
    "PostStore",
    "get_post_store",
    "CredentialStore",
    "get_credential_store",
    "FormError",
    "validate_post",
    "validate_registration",
]
