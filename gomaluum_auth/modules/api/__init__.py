"""
API Module - Black Box Interface

Purpose: RPC facade, request/response models, error categories
Interface: RPCFacade.login(), RPCFacade.echo(), RPCError
Hidden: Input validation, deadline handling, error mapping

The API module only orchestrates - the login logic lives in the auth module.
"""

from .errors import (
    CATEGORY_BY_KIND,
    HTTP_STATUS_BY_CATEGORY,
    ErrorCategory,
    RPCError,
    to_rpc_error,
)
from .facade import RPCFacade
from .models import (
    EchoRequest,
    EchoResponse,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
)

__all__ = [
    "CATEGORY_BY_KIND",
    "EchoRequest",
    "EchoResponse",
    "ErrorCategory",
    "ErrorResponse",
    "HTTP_STATUS_BY_CATEGORY",
    "LoginRequest",
    "LoginResponse",
    "RPCError",
    "RPCFacade",
    "to_rpc_error",
]
