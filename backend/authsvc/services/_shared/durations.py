"""Duration strings such as ``"15m"``, ``"168h"`` or ``"1h30m"``.

Token lifetimes are configured as compact duration strings: an optional
sign followed by one or more ``<number><unit>`` segments, where the number
may carry a decimal fraction. Supported units are ``ns``, ``us`` (``µs``),
``ms``, ``s``, ``m`` and ``h``. The bare string ``"0"`` is accepted.
The magnitude is capped at 2**63 - 1 nanoseconds (about 2562047h).
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

# Microseconds per unit; sub-microsecond units collapse towards zero
_UNIT_MICROSECONDS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

# Largest magnitude a duration may carry, in microseconds (int64 nanoseconds)
MAX_MICROSECONDS = Decimal(2**63 - 1) / 1000

_SEGMENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class DurationError(ValueError):
    """Raised when a duration string cannot be parsed."""


def parse_duration(value: str) -> timedelta:
    """
    Parse a duration string into a :class:`~datetime.timedelta`.

    :param value: Duration string (e.g. ``"15m"``, ``"-1.5h"``, ``"2h45m30s"``).
    :type value: str
    :returns: Parsed duration.
    :rtype: timedelta
    :raises DurationError: If the string is malformed or out of range.
    """
    if not isinstance(value, str):
        raise DurationError(f"invalid duration {value!r}")

    raw = value.strip()
    sign = 1
    if raw[:1] in {"+", "-"}:
        sign = -1 if raw[0] == "-" else 1
        raw = raw[1:]

    if raw == "0":
        return timedelta(0)
    if not raw:
        raise DurationError(f"invalid duration {value!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(raw):
        match = _SEGMENT.match(raw, pos)
        if match is None:
            raise DurationError(f"invalid duration {value!r}")
        number, unit = match.groups()
        try:
            total += Decimal(number) * _UNIT_MICROSECONDS[unit]
        except InvalidOperation as exc:  # pragma: no cover - regex already constrains digits
            raise DurationError(f"invalid duration {value!r}") from exc
        pos = match.end()
        if total > MAX_MICROSECONDS:
            raise DurationError(f"duration {value!r} out of range")

    return timedelta(microseconds=sign * int(total))
