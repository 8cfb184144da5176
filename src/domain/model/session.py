# domain/model/session.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domain.model.user import User


class SessionStatus(str, Enum):
    """Tag of the session state variant."""
    UNAUTHENTICATED = 'unauthenticated'
    AUTHENTICATING = 'authenticating'
    AUTHENTICATED = 'authenticated'


@dataclass(frozen=True)
class SessionState:
    """Tagged session state: exactly one status, user present iff AUTHENTICATED."""
    status: SessionStatus
    user: User | None = None

    def __post_init__(self):
        if (self.status == SessionStatus.AUTHENTICATED) != (self.user is not None):
            raise ValueError(
                f"SessionState {self.status.value} "
                f"{'requires' if self.status == SessionStatus.AUTHENTICATED else 'cannot carry'} a user"
            )

    # ── constructors ──────────────────────────────────────

    @classmethod
    def unauthenticated(cls) -> SessionState:
        return cls(SessionStatus.UNAUTHENTICATED)

    @classmethod
    def authenticating(cls) -> SessionState:
        return cls(SessionStatus.AUTHENTICATING)

    @classmethod
    def authenticated(cls, user: User) -> SessionState:
        return cls(SessionStatus.AUTHENTICATED, user)

    # ── derived flags ─────────────────────────────────────

    @property
    def is_authenticated(self) -> bool:
        match self.status:
            case SessionStatus.AUTHENTICATED:
                return True
            case SessionStatus.UNAUTHENTICATED | SessionStatus.AUTHENTICATING:
                return False

    @property
    def current_user(self) -> User | None:
        match self.status:
            case SessionStatus.AUTHENTICATED:
                return self.user
            case SessionStatus.UNAUTHENTICATED | SessionStatus.AUTHENTICATING:
                return None

    @property
    def is_loading(self) -> bool:
        match self.status:
            case SessionStatus.AUTHENTICATING:
                return True
            case SessionStatus.UNAUTHENTICATED | SessionStatus.AUTHENTICATED:
                return False


@dataclass(frozen=True)
class SessionSnapshot:
    """Observable view of the session handed to presentation-layer listeners."""
    status: SessionStatus
    is_authenticated: bool
    current_user: User | None
    is_loading: bool
    last_error: str | None

    @classmethod
    def of(cls, state: SessionState, last_error: str | None) -> SessionSnapshot:
        return cls(
            status=state.status,
            is_authenticated=state.is_authenticated,
            current_user=state.current_user,
            is_loading=state.is_loading,
            last_error=last_error,
        )

    def to_dict(self) -> dict:
        return {
            'status': self.status.value,
            'is_authenticated': self.is_authenticated,
            'current_user': self.current_user.to_dict() if self.current_user else None,
            'is_loading': self.is_loading,
            'last_error': self.last_error,
        }
