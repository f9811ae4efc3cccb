"""Registration, login and logout routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from starlette.responses import Response

from simple_blog.api.views import redirect, render
from simple_blog.config import Settings, get_settings
from simple_blog.services.base import ConflictError
from simple_blog.services.users import CredentialStore, get_credential_store
from simple_blog.services.validation import FormError, validate_registration
from simple_blog.utils.security import (
    SessionTokenCodec,
    clear_session_cookie,
    dummy_password_hash,
    get_token_codec,
    hash_password,
    set_session_cookie,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def start_session(
    user_id: int,
    username: str,
    codec: SessionTokenCodec,
    settings: Settings,
) -> Response:
    """Mint a session token, set it as a cookie and redirect home."""
    response = redirect("/")
    set_session_cookie(response, codec.issue(user_id, username), settings)
    return response


@router.post("/register")
async def register(
    request: Request,
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    users: CredentialStore = Depends(get_credential_store),
    codec: SessionTokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Register a new user and log them in.

    Validation failures re-render the landing page with the error list.
    """
    username = username.strip()
    password = password.strip()

    # Check-first only for a friendly message; the unique constraint is authoritative
    errors: list[FormError] = []
    if username and await users.find_by_username(username):
        errors.append(FormError.USER_EXISTS)
    errors.extend(validate_registration(username, password))

    if errors:
        return render(request, "homepage.html", {"username": username}, errors=errors)

    try:
        user = await users.create(username, hash_password(password))
    except ConflictError:
        logger.info("Registration raced on username=%s", username)
        return render(
            request, "homepage.html", {"username": username}, errors=[FormError.USER_EXISTS]
        )

    logger.info("Registered user id=%s", user.id)
    return start_session(user.id, user.username, codec, settings)


@router.get("/login")
async def login_form(request: Request) -> Response:
    """Render the login form."""
    return render(request, "login.html")


@router.post("/login")
async def login(
    request: Request,
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    users: CredentialStore = Depends(get_credential_store),
    codec: SessionTokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Authenticate a user and set the session cookie.

    An unknown username and a wrong password produce the same error.
    """
    username = username.strip()
    password = password.strip()

    user = await users.find_by_username(username) if username else None
    # Unknown usernames still pay for a bcrypt check so timing does not reveal them
    password_hash = user.password_hash if user else dummy_password_hash()
    if not verify_password(password, password_hash) or not user:
        logger.info("Failed login attempt for username=%s", username)
        return render(
            request,
            "login.html",
            {"username": username},
            errors=[FormError.INVALID_CREDENTIALS],
        )

    logger.info("User id=%s logged in", user.id)
    return start_session(user.id, user.username, codec, settings)


@router.get("/logout")
async def logout(settings: Settings = Depends(get_settings)) -> Response:
    """Clear the session cookie and go home."""
    response = redirect("/")
    clear_session_cookie(response, settings)
    return response
