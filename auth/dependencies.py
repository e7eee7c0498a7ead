"""
auth/dependencies.py -- The auth gate and its FastAPI Depends() wrapper.

Only one auth method exists: an `Authorization: Bearer <token>` header
carrying a JWT issued by POST /login/.

authenticate() is the plain-Python gate: it returns the username on success
and raises AuthMissing / AuthInvalid otherwise. get_current_user() wraps it
for FastAPI and turns both errors into HTTP 401. Protected routers declare it
as a router-level dependency, so it runs before every handler on them.

Layer rule: no imports from api/ or portal/.
  auth/dependencies.py may import from fastapi (for Request/HTTPException)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request

from auth.errors import AuthError, AuthInvalid, AuthMissing
from auth.tokens import decode_access_token

logger = logging.getLogger("covidportal.auth.gate")


def authenticate(authorization: str | None) -> str:
    """Validate a raw Authorization header value and return the token subject.

    The header is split on whitespace; the first part must be exactly
    `Bearer` and the second part is the credential.

    Raises:
        AuthMissing: header absent, empty, or not a Bearer credential.
        AuthInvalid: the credential fails signature or expiry verification.
    """
    parts = (authorization or "").split()
    if len(parts) < 2 or parts[0] != "Bearer":
        raise AuthMissing("Missing or malformed Authorization header.")

    session = decode_access_token(parts[1])
    if session is None:
        raise AuthInvalid("Invalid JWT Token")
    return session.subject


def get_current_user(request: Request) -> str:
    """Require a valid Bearer token. Raises HTTP 401 otherwise.

    The username is also stored on request.state.username for handlers and
    middleware that want it without re-declaring the dependency.

    Use as a FastAPI dependency:
        router = APIRouter(dependencies=[Depends(get_current_user)])
    """
    try:
        username = authenticate(request.headers.get("Authorization"))
    except AuthError as exc:
        code = "auth_missing" if isinstance(exc, AuthMissing) else "invalid_token"
        logger.info("Rejected %s %s: %s", request.method, request.url.path, code)
        raise HTTPException(
            status_code=401,
            detail={"code": code, "message": "Invalid JWT Token"},
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    request.state.username = username
    return username
