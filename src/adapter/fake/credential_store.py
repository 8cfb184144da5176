"""In-memory implementation of CredentialStore with simulated network latency."""

import asyncio
import logging
import os
import random
from dataclasses import dataclass

from domain.model.errors import InvalidCredentialsError, UserExistsError
from domain.model.user import User, normalize_email

logger = logging.getLogger(__name__)

DEFAULT_MIN_DELAY = 0.5
DEFAULT_MAX_DELAY = 1.5

SEED_ACCOUNTS: dict[str, str] = {
    'test@cliniq.com': 'password123',
    'demo@cliniq.com': 'demo123',
}


def _delay_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {raw!r}") from None


@dataclass(frozen=True)
class CredentialRecord:
    email: str
    password: str  # plaintext: mock only
    user: User


class MockCredentialStore:
    def __init__(
        self,
        min_delay: float | None = None,
        max_delay: float | None = None,
        seed: bool = True,
    ):
        if min_delay is None:
            min_delay = _delay_from_env('MOCK_AUTH_MIN_DELAY', DEFAULT_MIN_DELAY)
        if max_delay is None:
            max_delay = _delay_from_env('MOCK_AUTH_MAX_DELAY', DEFAULT_MAX_DELAY)
        self.min_delay = min_delay
        self.max_delay = max_delay
        if self.min_delay < 0 or self.max_delay < 0:
            raise ValueError("Simulated delay must be non-negative")
        if self.min_delay > self.max_delay:
            raise ValueError(
                f"min_delay ({self.min_delay}) exceeds max_delay ({self.max_delay})"
            )

        self.records: dict[str, CredentialRecord] = {}
        self._write_lock = asyncio.Lock()

        if seed:
            for email, password in SEED_ACCOUNTS.items():
                key = normalize_email(email)
                self.records[key] = CredentialRecord(key, password, User.create(key))

    # ── CredentialStore ──────────────────────────────────────

    async def authenticate(self, email: str, password: str) -> User:
        await self._simulate_network_delay()

        key = normalize_email(email)
        record = self.records.get(key)
        if record is None or record.password != password:
            logger.info("Authentication rejected", extra={"email": key})
            raise InvalidCredentialsError()

        return record.user

    async def create_account(self, email: str, password: str) -> User:
        await self._simulate_network_delay()

        key = normalize_email(email)
        # check-and-insert must not interleave with another create for the same key
        async with self._write_lock:
            if key in self.records:
                logger.info("Account creation rejected: email taken", extra={"email": key})
                raise UserExistsError()

            user = User.create(key)
            self.records[key] = CredentialRecord(key, password, user)

        logger.info("Account created", extra={"email": key, "userId": user.id})
        return user

    # ── read helpers ─────────────────────────────────────────

    def has_account(self, email: str) -> bool:
        return normalize_email(email) in self.records

    def __len__(self) -> int:
        return len(self.records)

    async def _simulate_network_delay(self) -> None:
        delay = random.uniform(self.min_delay, self.max_delay)
        if delay > 0:
            await asyncio.sleep(delay)
