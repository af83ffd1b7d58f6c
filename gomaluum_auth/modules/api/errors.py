"""
Transport-level error categories and the login error mapping.

The mapping from AuthErrorKind to ErrorCategory is a plain table covering
every kind.
"""

from enum import Enum
from typing import Any, Dict, Optional

from ..auth.errors import AuthError, AuthErrorKind


class ErrorCategory(str, Enum):
    """Error categories exposed to RPC callers."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID_ARGUMENT = "invalid_argument"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


HTTP_STATUS_BY_CATEGORY: Dict[ErrorCategory, int] = {
    ErrorCategory.UNAUTHENTICATED: 401,
    ErrorCategory.INVALID_ARGUMENT: 400,
    ErrorCategory.DEADLINE_EXCEEDED: 504,
    ErrorCategory.UNAVAILABLE: 503,
    ErrorCategory.INTERNAL: 500,
}

CATEGORY_BY_KIND: Dict[AuthErrorKind, ErrorCategory] = {
    AuthErrorKind.LOGIN_FAILED: ErrorCategory.UNAUTHENTICATED,
    AuthErrorKind.AUTH_COOKIE_NOT_FOUND: ErrorCategory.UNAUTHENTICATED,
    AuthErrorKind.URL_PARSE_FAILED: ErrorCategory.INVALID_ARGUMENT,
    AuthErrorKind.NETWORK_TIMEOUT: ErrorCategory.DEADLINE_EXCEEDED,
    AuthErrorKind.REQUEST_FAILED: ErrorCategory.UNAVAILABLE,
    AuthErrorKind.INTERNAL: ErrorCategory.INTERNAL,
}


class RPCError(Exception):
    """An error returned to the RPC caller."""

    def __init__(self, category: ErrorCategory, message: str):
        super().__init__(message)
        self.category = category
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_CATEGORY[self.category]

    def to_dict(self, error_format: str = "json", request_id: Optional[str] = None) -> Dict[str, Any]:
        """Format the error as a response body."""
        if error_format == "jsonrpc":
            return {
                "jsonrpc": "2.0",
                "error": {
                    "code": -32700 if self.status_code == 401 else -32603,
                    "message": self.message,
                    "data": {"category": self.category.value},
                },
                "id": request_id,
            }
        return {
            "error": self.message,
            "code": self.category.value,
            "status": self.status_code,
        }


def to_rpc_error(error: AuthError) -> RPCError:
    """Translate a login error into the RPC error returned to the caller."""
    return RPCError(CATEGORY_BY_KIND[error.kind], str(error))
