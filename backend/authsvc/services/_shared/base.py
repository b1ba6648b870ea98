# authsvc/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Own the time source so expiry arithmetic is testable.
    * Keep services thin, orchestration-only, no web/ORM leakage.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        """
        Initialize the base service.

        :param clock: Returns the current aware UTC time.
        :type clock: Callable[[], datetime] | None
        """
        self._clock = clock or (lambda: datetime.now(UTC))

    def now_utc(self) -> datetime:
        return self._clock()
