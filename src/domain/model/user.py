import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


def normalize_email(email: str) -> str:
    """Lowercase and strip surrounding whitespace; used as the account lookup key."""
    return email.strip().lower()


@dataclass(frozen=True)
class User:
    """Domain model representing an authenticated principal."""
    id: str
    email: str
    created_at: datetime

    # ── factory ───────────────────────────────────────────

    @staticmethod
    def create(email: str) -> 'User':
        """Create a new User with a generated ID and the current UTC time."""
        return User(
            id=uuid.uuid4().hex,
            email=email,
            created_at=datetime.now(timezone.utc),
        )

    # ── serialization ─────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'User':
        """Rebuild a User from to_dict() output.

        Raises ValueError if a key is missing or created_at is malformed.
        """
        try:
            return cls(
                id=data['id'],
                email=data['email'],
                created_at=datetime.fromisoformat(data['created_at']),
            )
        except KeyError as e:
            raise ValueError(f"Missing user field: {e.args[0]}") from e
        except TypeError as e:
            raise ValueError(f"Malformed created_at: {e}") from e
