"""
In-memory repository adapter - Implements UserRepository protocol.

Keeps user records in a process-local dict. Used for development and
tests; records are lost on restart.
"""

import logging
import threading
import uuid
from datetime import UTC, datetime

from src.domain.exceptions import DuplicateEmail
from src.domain.passwords import DEFAULT_BCRYPT_COST, hash_password
from src.domain.ports import NewUser, User

logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a dict keyed by user id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The duplicate check and the insert run under one lock, so concurrent
    registrations in the same process cannot both claim an email.
    """

    def __init__(self, bcrypt_cost: int = DEFAULT_BCRYPT_COST) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()
        self._bcrypt_cost = bcrypt_cost

    def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> User | None:
        wanted = email.lower()
        for user in list(self._users.values()):
            if user.email.lower() == wanted:
                return user
        return None

    def create(self, new_user: NewUser) -> User:
        """
        Store a new user after the duplicate check.

        Raises:
            DuplicateEmail: If an existing record's email matches case-insensitively
        """
        if self.get_by_email(new_user.email) is not None:
            raise DuplicateEmail(new_user.email)

        # Hash outside the lock; the check is repeated under it before inserting.
        password_hash = hash_password(new_user.password, self._bcrypt_cost)

        with self._lock:
            if self.get_by_email(new_user.email) is not None:
                raise DuplicateEmail(new_user.email)

            user = User(
                id=str(uuid.uuid4()),
                name=new_user.name,
                email=new_user.email,
                password_hash=password_hash,
                created_at=datetime.now(UTC),
            )
            self._users[user.id] = user

        logger.debug("Stored user %s in memory", user.id)
        return user

    def __len__(self) -> int:
        return len(self._users)
