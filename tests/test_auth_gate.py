"""
tests/test_auth_gate.py -- Unit tests for auth.dependencies.authenticate().

The gate must reject before any handler runs:
  - no header / empty header / wrong scheme  -> AuthMissing
  - bad signature / malformed / expired token -> AuthInvalid
and return the token subject otherwise.
"""

from __future__ import annotations

import os

os.environ.setdefault("DEBUG", "true")

from datetime import datetime, timedelta, timezone

import pytest

from auth.dependencies import authenticate
from auth.errors import AuthError, AuthInvalid, AuthMissing
from auth.tokens import create_access_token


@pytest.fixture
def token() -> str:
    return create_access_token("christopher_phillips")


class TestMissing:
    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer", "Bearer   "])
    def test_absent_or_empty_credential(self, header) -> None:
        with pytest.raises(AuthMissing):
            authenticate(header)

    def test_token_without_scheme(self, token: str) -> None:
        with pytest.raises(AuthMissing):
            authenticate(token)

    @pytest.mark.parametrize("scheme", ["Basic", "Token", "JWT", "bearer", "BEARER"])
    def test_wrong_scheme(self, scheme: str, token: str) -> None:
        with pytest.raises(AuthMissing):
            authenticate(f"{scheme} {token}")

    def test_missing_is_an_auth_error(self) -> None:
        with pytest.raises(AuthError):
            authenticate(None)


class TestInvalid:
    def test_garbage_token(self) -> None:
        with pytest.raises(AuthInvalid):
            authenticate("Bearer not.a.jwt")

    def test_expired_token(self) -> None:
        expired = create_access_token("alice", issued_at=datetime.now(timezone.utc) - timedelta(hours=2))
        with pytest.raises(AuthInvalid):
            authenticate(f"Bearer {expired}")

    def test_tampered_signature(self, token: str) -> None:
        head, _, sig = token.rpartition(".")
        flipped = sig[:5] + ("B" if sig[5] == "A" else "A") + sig[6:]
        with pytest.raises(AuthInvalid):
            authenticate(f"Bearer {head}.{flipped}")


class TestAuthenticated:
    def test_returns_subject(self, token: str) -> None:
        assert authenticate(f"Bearer {token}") == "christopher_phillips"

    def test_extra_whitespace_between_scheme_and_token(self, token: str) -> None:
        assert authenticate(f"Bearer   {token}") == "christopher_phillips"

    def test_surrounding_whitespace(self, token: str) -> None:
        assert authenticate(f"  Bearer {token}  ") == "christopher_phillips"
