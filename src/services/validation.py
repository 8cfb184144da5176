"""Input validation for the login and registration forms.

Each validator raises the first AuthError it finds and returns None otherwise.
Checks run in a fixed order so the user always sees the earliest problem.
"""

import re

from domain.model.errors import (
    EmptyFieldError,
    InvalidEmailError,
    PasswordMismatchError,
    WeakPasswordError,
)

MIN_PASSWORD_LENGTH = 8

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_login(email: str, password: str) -> None:
    """Raises EmptyFieldError for a blank email or empty password."""
    if not email.strip():
        raise EmptyFieldError("Email")
    if not password:
        raise EmptyFieldError("Password")


def validate_registration(email: str, password: str, confirm_password: str) -> None:
    """Validate registration input.

    Order: email present → email format → password present →
    password length → confirmation match.

    Raises:
        EmptyFieldError: email or password missing
        InvalidEmailError: email does not look like an address
        WeakPasswordError: password shorter than MIN_PASSWORD_LENGTH
        PasswordMismatchError: confirmation differs from password
    """
    trimmed_email = email.strip()
    if not trimmed_email:
        raise EmptyFieldError("Email")
    if not is_valid_email(trimmed_email):
        raise InvalidEmailError()
    if not password:
        raise EmptyFieldError("Password")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise WeakPasswordError()
    if password != confirm_password:
        raise PasswordMismatchError()
