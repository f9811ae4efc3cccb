"""Form validation for registration, login and post submission.

Validators return a list of :class:`FormError` members rather than strings;
templates render :attr:`FormError.message` at the response boundary.
"""

import re
from enum import Enum

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 10
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 70


class FormError(Enum):
    """Validation failures shown inline on a form."""

    USER_EXISTS = "user_exists"
    USERNAME_LENGTH = "username_length"
    USERNAME_CHARACTERS = "username_characters"
    PASSWORD_LENGTH = "password_length"
    INVALID_CREDENTIALS = "invalid_credentials"
    TITLE_REQUIRED = "title_required"
    BODY_REQUIRED = "body_required"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    FormError.USER_EXISTS: "User already exists",
    FormError.USERNAME_LENGTH: (
        f"Username should be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters long"
    ),
    FormError.USERNAME_CHARACTERS: "Username should only contain letters and numbers",
    FormError.PASSWORD_LENGTH: (
        f"Password should be {PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters long"
    ),
    # Deliberately vague so a failed login does not reveal whether the username exists
    FormError.INVALID_CREDENTIALS: "username or password not found",
    FormError.TITLE_REQUIRED: "Add a title",
    FormError.BODY_REQUIRED: "Add a body",
}


def validate_registration(username: str, password: str) -> list[FormError]:
    """Check username and password shape. Expects already-trimmed input."""
    errors = []
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        errors.append(FormError.USERNAME_LENGTH)
    if not USERNAME_PATTERN.match(username):
        errors.append(FormError.USERNAME_CHARACTERS)
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        errors.append(FormError.PASSWORD_LENGTH)
    return errors


def validate_post(title: str, body: str) -> list[FormError]:
    """Require a non-blank title and body."""
    errors = []
    if not title.strip():
        errors.append(FormError.TITLE_REQUIRED)
    if not body.strip():
        errors.append(FormError.BODY_REQUIRED)
    return errors


def messages(errors: list[FormError]) -> list[str]:
    """Render error kinds as the strings shown to the user."""
    return [error.message for error in errors]
