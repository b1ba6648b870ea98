from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from authsvc.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted password hashing backed by :mod:`werkzeug.security`.

    :param method: Werkzeug method string (``"scrypt"``, ``"pbkdf2:sha256:600000"``);
        ``None`` keeps Werkzeug's default.
    """

    method: str | None = None

    def hash(self, raw: str) -> str:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        if self.method:
            return generate_password_hash(raw, method=self.method)
        return generate_password_hash(raw)

    def verify(self, hashed: str, raw: str) -> bool:
        if not hashed:
            return False
        # ``check_password_hash`` is not typed and returns ``Any``; coerce to bool for mypy.
        return bool(check_password_hash(hashed, raw))
