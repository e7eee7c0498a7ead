"""
api/routes/auth.py -- Password login.

Routes:
  POST /login/  -- exchange username + password for a signed JWT

Security:
  POST /login/ is rate-limited per client IP (Settings.login_rate_limit).
  login() always runs one bcrypt comparison, so unknown user and wrong
  password take the same time. Use it, never inline the lookup + check.
  Cache-Control: no-store on every login response.

Unknown user and wrong password both answer 400. Whether the body says which
one failed is controlled by Settings.reveal_login_failure_reason; the reason
is always logged.

The handler is a plain `def`: FastAPI runs it in the worker thread pool, so
bcrypt never blocks the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import ErrorDetail, ErrorResponse, LoginRequest, LoginResponse
from auth.errors import LoginError, UnknownUser
from auth.login import login as login_user
from auth.store import UserStore
from core.config import get_settings

# Auth policy:
# - POST /login/: public -- the endpoint that issues credentials
router = APIRouter()


def _login_failure(exc: LoginError) -> ErrorDetail:
    if not get_settings().reveal_login_failure_reason:
        return ErrorDetail(code="invalid_credentials", message="Invalid username or password.")
    if isinstance(exc, UnknownUser):
        return ErrorDetail(code="invalid_user", message="Invalid user")
    return ErrorDetail(code="invalid_password", message="Invalid password")


@router.post("/login/", response_model=LoginResponse)
@limiter.limit(get_settings().login_rate_limit)  # below @router so the registered endpoint is the limited wrapper
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password; return a one-hour JWT."""
    user_store: UserStore = request.app.state.user_store
    try:
        token = login_user(user_store, body.username, body.password)
    except LoginError as exc:
        resp = JSONResponse(
            status_code=400,
            content=ErrorResponse(error=_login_failure(exc)).model_dump(),
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(jwt_token=token).model_dump(by_alias=True),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp
