"""Unit tests for the Werkzeug password hasher adapter."""

from __future__ import annotations

import pytest
from authsvc.infra.security import WerkzeugPasswordHasher


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")


def test_hash_is_salted_and_verifiable(hasher):
    first = hasher.hash("s3cret-pass")
    second = hasher.hash("s3cret-pass")

    assert first != "s3cret-pass"
    assert first != second
    assert first.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify(first, "s3cret-pass") is True
    assert hasher.verify(first, "wrong-pass") is False


def test_empty_password_rejected(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_empty_hash_never_verifies(hasher):
    assert hasher.verify("", "anything") is False


def test_default_method_round_trip():
    hasher = WerkzeugPasswordHasher()

    assert hasher.verify(hasher.hash("pw-123456"), "pw-123456") is True
