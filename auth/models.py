"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores and the token
module do the work.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A local account allowed to log in.

    Users are provisioned out-of-band (see `main.py create-user`); the HTTP
    API only ever reads them. hashed_password is a bcrypt hash -- the
    plaintext is never stored.
    """

    username: str
    hashed_password: str
    id: int | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class SessionToken:
    """The verified contents of a signed access token.

    subject is the username the token was issued to. There is no server-side
    record of issued tokens; a SessionToken only exists after a successful
    signature and expiry check.
    """

    subject: str
    issued_at: datetime
    expires_at: datetime
