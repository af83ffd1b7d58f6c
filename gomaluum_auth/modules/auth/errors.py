"""
Error types for the CAS login flow.

Every error carries a closed ``kind`` so the API layer can translate it
with a lookup table instead of isinstance chains.
"""

from enum import Enum
from typing import Optional


class AuthErrorKind(str, Enum):
    """Closed set of login failure kinds."""

    REQUEST_FAILED = "request_failed"
    LOGIN_FAILED = "login_failed"
    AUTH_COOKIE_NOT_FOUND = "auth_cookie_not_found"
    URL_PARSE_FAILED = "url_parse_failed"
    NETWORK_TIMEOUT = "network_timeout"
    INTERNAL = "internal"


class LoginStage(str, Enum):
    """HTTP steps of the CAS handshake, in order."""

    BOOTSTRAP = "bootstrap"
    SUBMIT = "submit"
    EXTRACT = "extract"


class AuthError(Exception):
    """Base class for all login errors."""

    kind: AuthErrorKind = AuthErrorKind.INTERNAL
    message = "Authentication error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class RequestFailedError(AuthError):
    """Transport failure (DNS, connect, TLS, timeout) during one stage."""

    kind = AuthErrorKind.REQUEST_FAILED

    def __init__(self, stage: LoginStage, cause: Exception):
        self.stage = stage
        self.cause = cause
        super().__init__(f"HTTP request failed during {stage.value}: {cause}")


class LoginFailedError(AuthError):
    """The portal refused the credentials."""

    kind = AuthErrorKind.LOGIN_FAILED
    message = "Login failed: Invalid credentials or authentication token not found"


class AuthCookieNotFoundError(AuthError):
    """The handshake finished without the session cookie being set."""

    kind = AuthErrorKind.AUTH_COOKIE_NOT_FOUND
    message = "Authentication cookie not found"


class URLParseFailedError(AuthError):
    """A configured portal URL is malformed."""

    kind = AuthErrorKind.URL_PARSE_FAILED

    def __init__(self, url: str, reason: str = "not an absolute http(s) URL"):
        self.url = url
        super().__init__(f"Failed to parse URL: {url} ({reason})")


class NetworkTimeoutError(AuthError):
    """The whole login attempt exceeded its deadline."""

    kind = AuthErrorKind.NETWORK_TIMEOUT
    message = "Network timeout"


class InternalAuthError(AuthError):
    """Unexpected failure inside the login flow."""

    kind = AuthErrorKind.INTERNAL

    def __init__(self, detail: str):
        super().__init__(f"Internal server error: {detail}")
