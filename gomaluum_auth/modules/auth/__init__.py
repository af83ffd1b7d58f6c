"""
Authentication Module - Black Box Interface

Purpose: Log in to the i-Ma'luum CAS portal and return its session token
Interface: CASLoginFlow.login(), create_form_payload(), AuthFactory
Hidden: Handshake ordering, cookie handling, failure detection

Any LoginService implementation can replace the CAS flow without
affecting the API layer.
"""

from .cas import CASLoginFlow, create_form_payload
from .errors import (
    AuthCookieNotFoundError,
    AuthError,
    AuthErrorKind,
    InternalAuthError,
    LoginFailedError,
    LoginStage,
    NetworkTimeoutError,
    RequestFailedError,
    URLParseFailedError,
)
from .service import LoginResult, LoginService

__all__ = [
    "AuthCookieNotFoundError",
    "AuthError",
    "AuthErrorKind",
    "CASLoginFlow",
    "InternalAuthError",
    "LoginFailedError",
    "LoginResult",
    "LoginService",
    "LoginStage",
    "NetworkTimeoutError",
    "RequestFailedError",
    "URLParseFailedError",
    "create_form_payload",
]
