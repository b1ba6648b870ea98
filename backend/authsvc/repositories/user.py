"""User repository for persistence-only lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import Session

from authsvc.core.extensions import db
from authsvc.models.user import User


class UserRepository:
    """Persistence-only repository for :class:`User`.

    It never commits or rolls back; the unit of work owns the transaction.
    It NEVER handles tokens or password hashing.

    :param session: Session to use; defaults to the Flask-scoped ``db.session``
        resolved at call time.
    """

    model = User

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else db.session

    # ---------------------------- Lookup helpers ----------------------------

    def get(self, user_id: int) -> User | None:
        """Fetch a user by primary key.

        :param user_id: Identifier of the user.
        :type user_id: int
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        return cast(User | None, self.session.get(User, user_id))

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    # ---------------------------- Writes ----------------------------

    def add(self, user: User) -> User:
        """Stage a new user and flush so the generated id is available."""
        self.session.add(user)
        self.session.flush()
        return user
