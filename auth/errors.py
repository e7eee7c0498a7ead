"""
auth/errors.py -- Exception taxonomy for login and request authentication.

The login errors are kept distinct so tests and logs can tell an unknown
username from a wrong password. Whether that distinction reaches the client
is decided in the route layer (see Settings.reveal_login_failure_reason).

Layer rule: no imports from api/ or portal/.
"""


class AuthError(Exception):
    """A request could not be authenticated. Terminal for the request (401)."""


class AuthMissing(AuthError):
    """No Authorization header, or one that is not `Bearer <token>`."""


class AuthInvalid(AuthError):
    """Bad signature, malformed token, or expired token."""


class LoginError(Exception):
    """Username/password login failed."""


class UnknownUser(LoginError):
    pass


class BadPassword(LoginError):
    pass
