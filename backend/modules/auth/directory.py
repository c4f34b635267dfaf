"""
In-memory user directory.

For testing and development. Production deployments provide their own
IUserDirectory backed by a real store.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from .interfaces import IPasswordHasher
from .models import UserRecord


class InMemoryUserDirectory:
    """User directory keyed by username. Read-only after construction."""

    def __init__(self, records: Iterable[UserRecord] = ()):
        self._by_username: dict[str, UserRecord] = {}
        for record in records:
            if record.username in self._by_username:
                raise ValueError(f"Duplicate username: {record.username}")
            self._by_username[record.username] = record

    async def find_by_username(self, username: str) -> Optional[UserRecord]:
        return self._by_username.get(username)

    def __len__(self) -> int:
        return len(self._by_username)


# (id, username, email, password, created_at)
DEMO_USERS = [
    (1, "admin", "admin@example.com", "password123", datetime(2024, 1, 1, tzinfo=timezone.utc)),
    (2, "user", "user@example.com", "userpass", datetime(2024, 1, 2, tzinfo=timezone.utc)),
]


def seed_demo_directory(hasher: IPasswordHasher) -> InMemoryUserDirectory:
    """Build a directory holding the demo accounts, hashed once up front."""
    return InMemoryUserDirectory(
        UserRecord(
            id=user_id,
            username=username,
            email=email,
            password_hash=hasher.hash(password),
            created_at=created_at,
        )
        for user_id, username, email, password, created_at in DEMO_USERS
    )
