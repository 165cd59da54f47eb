"""Domain errors raised by the user and authentication services.

Callers branch on the exception type (or its ``code``), never on the message text.
"""


class AuthServiceError(Exception):
    """Base class for authentication/registration failures."""

    code = "AUTH_ERROR"
    default_message = "Authentication error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateEmailError(AuthServiceError):
    """A user with the requested email already exists."""

    code = "DUPLICATE_EMAIL"
    default_message = "User with this email already exists"


class UserNotFoundError(AuthServiceError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class InvalidCredentialsError(AuthServiceError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid password"


class UserCreationError(AuthServiceError):
    """Unexpected failure while creating a user; the cause is chained, not exposed."""

    code = "USER_CREATION_FAILED"
    default_message = "Failed to create user"
