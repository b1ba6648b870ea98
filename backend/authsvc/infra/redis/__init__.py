from .redis_revocation_store import DEFAULT_PREFIX, RedisRevocationStore

__all__ = ["RedisRevocationStore", "DEFAULT_PREFIX"]
