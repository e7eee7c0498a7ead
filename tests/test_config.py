"""Unit tests for core/config.py -- the SECRET_KEY policy and defaults.

Settings are built directly with keyword arguments (which win over the
environment) and _env_file=None so a developer's .env cannot leak in.
The cached get_settings() singleton is left untouched.
"""

import pytest

from core.config import Settings


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


def test_production_requires_secret_key() -> None:
    with pytest.raises(ValueError, match="SECRET_KEY is required"):
        _settings(debug=False, secret_key="")


def test_short_secret_key_rejected() -> None:
    with pytest.raises(ValueError, match="at least 32 characters"):
        _settings(debug=False, secret_key="too-short")


def test_short_secret_key_rejected_in_debug_too() -> None:
    with pytest.raises(ValueError, match="at least 32 characters"):
        _settings(debug=True, secret_key="too-short")


def test_debug_generates_random_key() -> None:
    first = _settings(debug=True, secret_key="")
    second = _settings(debug=True, secret_key="")
    assert len(first.secret_key) >= 32
    assert first.secret_key != second.secret_key


def test_explicit_key_kept() -> None:
    key = "k" * 48
    assert _settings(debug=False, secret_key=key).secret_key == key


def test_defaults() -> None:
    s = _settings(debug=False, secret_key="k" * 32)
    assert s.token_expire_seconds == 3600
    assert s.reveal_login_failure_reason is False
    assert s.database_url.startswith("sqlite:///")
    assert s.database_url.endswith("covid19IndiaPortal.db")


def test_non_positive_lifetime_rejected() -> None:
    with pytest.raises(ValueError, match="TOKEN_EXPIRE_SECONDS"):
        _settings(debug=False, secret_key="k" * 32, token_expire_seconds=0)


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "e" * 40)
    monkeypatch.setenv("DEBUG", "false")
    monkeypatch.setenv("REVEAL_LOGIN_FAILURE_REASON", "true")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    s = Settings(_env_file=None)
    assert s.secret_key == "e" * 40
    assert s.reveal_login_failure_reason is True
    assert s.database_url == "sqlite:///:memory:"
