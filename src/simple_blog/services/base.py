"""Domain exceptions shared by the stores, the token codec and the routes."""


class BlogError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)


class ConflictError(BlogError):
    """Raised when a unique value (such as a username) is already taken."""

    def __init__(self, message: str = "Resource already exists") -> None:
        super().__init__(message)


class InvalidTokenError(BlogError):
    """Raised when a session token has a bad signature, bad payload or has expired."""

    def __init__(self, message: str = "Invalid session token") -> None:
        super().__init__(message)


class AuthorizationFailure(BlogError):
    """Raised when a request lacks the identity or ownership a route requires.

    The application turns this into a redirect to the landing page, so the
    message never reaches the client.
    """

    def __init__(self, message: str = "Not authorized") -> None:
        super().__init__(message)
