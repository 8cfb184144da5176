"""Domain-level exceptions.

Services and adapters raise these errors to express business rule violations.
The session controller catches them and turns them into user-facing messages.
"""

from enum import Enum

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class DomainError(Exception):
    """Base class for all domain errors."""


class AuthErrorKind(str, Enum):
    """Closed set of validation/authentication failure kinds."""
    INVALID_EMAIL = 'invalid_email'
    WEAK_PASSWORD = 'weak_password'
    PASSWORD_MISMATCH = 'password_mismatch'
    USER_EXISTS = 'user_exists'
    INVALID_CREDENTIALS = 'invalid_credentials'
    EMPTY_FIELD = 'empty_field'
    CUSTOM = 'custom'


class AuthError(DomainError):
    """Validation or authentication failure with a user-facing message."""

    kind: AuthErrorKind = AuthErrorKind.CUSTOM

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthError):
            return NotImplemented
        return self.kind == other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidEmailError(AuthError):
    kind = AuthErrorKind.INVALID_EMAIL

    def __init__(self):
        super().__init__("Please enter a valid email address")


class WeakPasswordError(AuthError):
    kind = AuthErrorKind.WEAK_PASSWORD

    def __init__(self):
        super().__init__("Password must be at least 8 characters long")


class PasswordMismatchError(AuthError):
    kind = AuthErrorKind.PASSWORD_MISMATCH

    def __init__(self):
        super().__init__("Passwords do not match")


class UserExistsError(AuthError):
    """An account with the same normalized email already exists."""
    kind = AuthErrorKind.USER_EXISTS

    def __init__(self):
        super().__init__("An account with this email already exists")


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password (deliberately indistinguishable)."""
    kind = AuthErrorKind.INVALID_CREDENTIALS

    def __init__(self):
        super().__init__("Invalid email or password")


class EmptyFieldError(AuthError):
    kind = AuthErrorKind.EMPTY_FIELD

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class CustomAuthError(AuthError):
    """Free-form failure; the message is shown verbatim."""
    kind = AuthErrorKind.CUSTOM
