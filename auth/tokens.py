"""
auth/tokens.py -- Password hashing and JWT session-token utilities.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry
       the username (sub), the issue time (iat) and the expiry (exp), one
       hour after issue by default. Verification returns None on any failure
       -- the auth gate turns that into AuthInvalid.

  Passwords: bcrypt. Its cost factor makes brute-force expensive for
       low-entropy secrets. The _DUMMY_HASH constant lets the login flow run
       a full bcrypt comparison even for unknown usernames so response time
       does not reveal whether a username exists.

  SECRET_KEY: sourced from core.config.get_settings(). The Settings class
       validates the key at startup and the singleton keeps it immutable for
       the process lifetime.

Layer rule: no imports from api/ or portal/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode

from auth.models import SessionToken
from core.config import get_settings

logger = logging.getLogger("covidportal.auth")

_ALGORITHM = "HS256"

# Claims every token must carry; python-jose rejects tokens that lack them.
_DECODE_OPTIONS = {
    "require_sub": True,
    "require_iat": True,
    "require_exp": True,
    "leeway": 0,
}

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt only looks at the first 72 bytes; recent releases raise ValueError
    for longer input rather than truncating, and that error propagates here.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash.

    Any error inside bcrypt (malformed hash, over-long password) counts as a
    mismatch. Callers never learn why a check failed.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except Exception:
        return False


# Computed once at module load so the first unknown-username login is not
# measurably slower than later ones.
_DUMMY_HASH: str = hash_password("covidportal_timing_dummy")


def equalize_timing(plain: str) -> None:
    """Burn one bcrypt comparison. Used when there is no real hash to check."""
    verify_password(plain, _DUMMY_HASH)


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(username: str, issued_at: datetime | None = None) -> str:
    """Encode a signed JWT asserting `username` for one token lifetime.

    Args:
        username:  Stored as the `sub` claim.
        issued_at: Issue time; defaults to now. Tests pass a time in the past
                   to mint already-expired tokens.
    """
    settings = get_settings()
    issued = issued_at or datetime.now(timezone.utc)
    expires = issued + timedelta(seconds=settings.token_expire_seconds)
    payload = {
        "sub": username,
        "iat": int(issued.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def _is_canonical(token: str) -> bool:
    """Return True if every JWT segment is canonical unpadded base64url.

    The last character of a base64url segment can carry unused bits, so two
    different strings may decode to the same signature bytes. Requiring the
    segment to re-encode to itself makes every character of the token count.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return False
    try:
        return all(base64url_encode(base64url_decode(p.encode("ascii"))).decode("ascii") == p for p in parts)
    except (ValueError, UnicodeError):
        return False


def decode_access_token(token: str) -> SessionToken | None:
    """Verify a JWT and return its SessionToken, or None on any failure.

    Failure covers a bad signature, a tampered or malformed token, missing
    claims and an expiry in the past.
    """
    if not token or not _is_canonical(token):
        return None
    try:
        payload = jwt.decode(
            token,
            get_settings().secret_key,
            algorithms=[_ALGORITHM],
            options=_DECODE_OPTIONS,
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        return None
    try:
        return SessionToken(
            subject=subject,
            issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
        )
    except (TypeError, ValueError, OverflowError):
        return None
