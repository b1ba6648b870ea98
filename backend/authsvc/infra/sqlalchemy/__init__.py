from .user_store import SQLAlchemyUserStore

__all__ = ["SQLAlchemyUserStore"]
