"""
auth/login.py -- Username/password login composed from store, bcrypt and JWT.

login() is the only entry point that turns credentials into a session token.
It always performs exactly one bcrypt comparison, real or dummy, so an
unknown username and a wrong password cost the same time.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from auth.errors import BadPassword, UnknownUser
from auth.tokens import create_access_token, equalize_timing, verify_password

if TYPE_CHECKING:
    from auth.store import UserStore

logger = logging.getLogger("covidportal.auth.login")


def login(store: UserStore, username: str, password: str) -> str:
    """Authenticate `username` / `password` and return a signed access token.

    Raises:
        UnknownUser: no user with exactly this username exists.
        BadPassword: the user exists but the password does not match.
    """
    user = store.get_by_username(username)
    if user is None:
        # Do NOT return before running bcrypt.
        equalize_timing(password)
        logger.info("Login rejected for %r: unknown user", username)
        raise UnknownUser(username)

    if not verify_password(password, user.hashed_password):
        logger.info("Login rejected for %r: bad password", username)
        raise BadPassword(username)

    token = create_access_token(user.username)
    logger.info("Login succeeded for %r", username)
    return token
