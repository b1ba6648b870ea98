"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

from authsvc.core.extensions import db
from authsvc.repositories import UserRepository
from authsvc.uow.base import UnitOfWork


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. A read-only unit never commits; on a clean exit it leaves
    the session alone (request teardown closes it), on error it rolls back.

    :param readonly: Skip the commit on a clean exit.
    """

    def __init__(self, *, readonly: bool = False) -> None:
        self.session = db.session
        self.readonly = readonly
        self.users = UserRepository(session=self.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # No-op: the session is lazily started on the first statement.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        if self.readonly:
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        if self.readonly:
            raise RuntimeError("Read-only unit of work cannot commit.")
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
