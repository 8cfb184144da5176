"""Auth session controller: login, registration and observable session state.

Flow: clear error → validate → AUTHENTICATING → credential store → reconcile.

The controller is the only writer of session state. It is meant to be driven
from a single event loop and does no locking of its own.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from adapter.fake.credential_store import MockCredentialStore
from domain.model.errors import GENERIC_ERROR_MESSAGE, AuthError
from domain.model.session import SessionSnapshot, SessionState
from domain.model.user import User, normalize_email
from port.credential_store import CredentialStore
from services.validation import validate_login, validate_registration

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionSnapshot], None]

_UNCHANGED = object()


class AuthSessionController:
    """Owns the session state and the last user-facing error message."""

    def __init__(self, store: CredentialStore | None = None):
        self.store: CredentialStore = store if store is not None else MockCredentialStore()
        self._state = SessionState.unauthenticated()
        self._last_error: str | None = None
        self._listeners: list[SessionListener] = []
        self._published = self.snapshot()

    # ── observable state ──────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def current_user(self) -> User | None:
        return self._state.current_user

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot.of(self._state, self._last_error)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called with a SessionSnapshot on every change.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ── operations ────────────────────────────────────────

    async def login(self, email: str, password: str) -> None:
        self._set(last_error=None)

        try:
            validate_login(email, password)
        except AuthError as e:
            logger.debug("Login input rejected", extra={"errorKind": e.kind.value})
            self._set(last_error=e.message)
            return

        logger.info("Login requested", extra={"email": normalize_email(email)})
        await self._run('login', self.store.authenticate, email, password)

    async def register(self, email: str, password: str, confirm_password: str) -> None:
        self._set(last_error=None)

        try:
            validate_registration(email, password, confirm_password)
        except AuthError as e:
            logger.debug("Registration input rejected", extra={"errorKind": e.kind.value})
            self._set(last_error=e.message)
            return

        trimmed_email = email.strip()
        logger.info("Registration requested", extra={"email": normalize_email(trimmed_email)})
        await self._run('register', self.store.create_account, trimmed_email, password)

    def logout(self) -> None:
        user = self.current_user
        self._set(state=SessionState.unauthenticated(), last_error=None)
        if user is not None:
            logger.info("Logged out", extra={"userId": user.id})

    def clear_error(self) -> None:
        self._set(last_error=None)

    # ── internals ─────────────────────────────────────────

    async def _run(self, operation: str, call: Callable[..., Awaitable[User]], *args) -> None:
        """Await a store call and reconcile its outcome into session state."""
        self._set(state=SessionState.authenticating())

        try:
            user = await call(*args)
            authenticated = SessionState.authenticated(user)
        except AuthError as e:
            logger.info(f"{operation.capitalize()} failed", extra={"errorKind": e.kind.value})
            self._set(state=SessionState.unauthenticated(), last_error=e.message)
            return
        except asyncio.CancelledError:
            logger.warning(f"{operation.capitalize()} cancelled")
            self._set(state=SessionState.unauthenticated(), last_error=GENERIC_ERROR_MESSAGE)
            raise
        except Exception:
            logger.error(f"Unexpected error during {operation}", exc_info=True)
            self._set(state=SessionState.unauthenticated(), last_error=GENERIC_ERROR_MESSAGE)
            return

        logger.info(f"{operation.capitalize()} succeeded", extra={"userId": user.id})
        self._set(state=authenticated, last_error=None)

    def _set(self, state: SessionState | None = None, last_error=_UNCHANGED) -> None:
        if state is not None:
            self._state = state
        if last_error is not _UNCHANGED:
            self._last_error = last_error
        self._publish()

    def _publish(self) -> None:
        snapshot = self.snapshot()
        if snapshot == self._published:
            return
        self._published = snapshot

        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.error("Session listener failed", exc_info=True)
