from typing import Protocol

from domain.model.user import User


class CredentialStore(Protocol):
    """Protocol defining the interface for credential checks and account creation.

    Both operations may suspend (network or simulated latency) and fail with
    an AuthError from domain.model.errors.
    """
    async def authenticate(self, email: str, password: str) -> User:
        """Return the User for email/password or raise InvalidCredentialsError."""
        ...

    async def create_account(self, email: str, password: str) -> User:
        """Create and return a new User or raise UserExistsError."""
        ...
