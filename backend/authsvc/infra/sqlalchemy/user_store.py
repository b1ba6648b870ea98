# authsvc/infra/sqlalchemy/user_store.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from authsvc.models.user import User
from authsvc.services._shared.errors import ConflictError, UserStoreError
from authsvc.services._shared.ports import NewUser, UserRecord, UserStore
from authsvc.uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        email=user.email,
        password_hash=user.password_hash,
        name=user.name,
        created_at=user.created_at,
    )


class SQLAlchemyUserStore(UserStore):
    """
    :class:`UserStore` adapter over the SQLAlchemy unit of work.

    Driver failures surface as :class:`UserStoreError`; a unique-email race
    on insert surfaces as :class:`ConflictError`.
    """

    def create(self, user: NewUser) -> UserRecord:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                row = uow.users.add(
                    User(email=user.email, password_hash=user.password_hash, name=user.name)
                )
                record = _to_record(row)
        except IntegrityError as exc:
            raise ConflictError("User", "email already exists") from exc
        except SQLAlchemyError as exc:
            log.error("user_store.create_failed", exc_info=True)
            raise UserStoreError() from exc
        return record

    def get_by_email(self, email: str) -> UserRecord | None:
        try:
            with SQLAlchemyUnitOfWork(readonly=True) as uow:
                row = uow.users.get_by_email(email)
                return _to_record(row) if row is not None else None
        except SQLAlchemyError as exc:
            log.error("user_store.lookup_failed", exc_info=True)
            raise UserStoreError() from exc

    def get_by_id(self, user_id: int) -> UserRecord | None:
        try:
            with SQLAlchemyUnitOfWork(readonly=True) as uow:
                row = uow.users.get(user_id)
                return _to_record(row) if row is not None else None
        except SQLAlchemyError as exc:
            log.error("user_store.lookup_failed", exc_info=True)
            raise UserStoreError() from exc
