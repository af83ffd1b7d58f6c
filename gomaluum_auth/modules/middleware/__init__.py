"""
Authentication Middleware Module - Black Box Interface

Purpose: Apply the bearer-token gate to every request of a FastAPI app
Interface: AuthMiddleware, BearerTokenGate
Hidden: Header extraction, error formatting

Can be used by any FastAPI app or sub-app that needs the same gate.
"""

import logging
from typing import Dict, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..api.errors import RPCError
from .gate import (
    AUTHORIZATION_KEY,
    BearerTokenGate,
    GateMisconfiguredError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def raw_headers(request: Request) -> Dict[str, bytes]:
    """
    Request headers with their values as received on the wire.

    Starlette decodes header values as latin-1; the gate compares bytes, so
    the undecoded values are used. ASGI header names are already lower-case.
    """
    return {name.decode("latin-1"): value for name, value in request.headers.raw}


class AuthMiddleware:
    """
    Authorization middleware for FastAPI applications.

    Every request passes through the gate before routing, so a rejected
    call never reaches its handler.
    """

    def __init__(
        self,
        gate: BearerTokenGate,
        skip_paths: Optional[Dict[str, List[str]]] = None,
        error_format: str = "json",
        log_attempts: bool = True,
    ):
        """
        Initialize authorization middleware.

        Args:
            gate: Bearer-token gate holding the expected secret
            skip_paths: Dict of {path: [methods]} to skip authorization
            error_format: Error response format ("json" or "jsonrpc")
            log_attempts: Whether to log authorization attempts
        """
        self.gate = gate
        self.skip_paths = skip_paths or {}
        self.error_format = error_format
        self.log_attempts = log_attempts

    def should_skip_auth(self, request: Request) -> bool:
        """Check if authorization should be skipped for this request."""
        path = str(request.url.path)
        method = request.method.upper()

        if path in self.skip_paths:
            allowed_methods = self.skip_paths[path]
            if "*" in allowed_methods or method in allowed_methods:
                return True

        return False

    def reject(self, error: RPCError) -> JSONResponse:
        """Render a gate failure."""
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_dict(self.error_format),
        )

    async def __call__(self, request: Request, call_next):
        """Process the request through the gate."""
        if self.should_skip_auth(request):
            if self.log_attempts:
                logger.debug(f"Skipping auth for {request.method} {request.url.path}")
            return await call_next(request)

        try:
            self.gate.authorize(raw_headers(request))
        except GateMisconfiguredError as e:
            logger.error(f"Rejecting {request.url.path}: {e}")
            return self.reject(e)
        except UnauthorizedError as e:
            if self.log_attempts:
                presented = request.headers.get(AUTHORIZATION_KEY)
                reason = "without auth token" if presented is None else "with invalid auth token"
                logger.warning(f"Request to {request.url.path} {reason}")
            return self.reject(e)

        return await call_next(request)


def create_bearer_token_middleware(
    gate: BearerTokenGate,
    skip_paths: Optional[Dict[str, List[str]]] = None,
    error_format: str = "json",
) -> AuthMiddleware:
    """
    Factory function to create bearer-token middleware.

    Args:
        gate: Configured BearerTokenGate
        skip_paths: Extra paths to skip {"/path": ["GET", "POST"]}
        error_format: "json" or "jsonrpc" error format

    Returns:
        Configured AuthMiddleware instance
    """
    default_skip_paths = {"/health": ["GET"]}
    if skip_paths:
        default_skip_paths.update(skip_paths)

    return AuthMiddleware(
        gate=gate,
        skip_paths=default_skip_paths,
        error_format=error_format,
    )


# Module interface - what this module provides
__all__ = [
    "AuthMiddleware",
    "BearerTokenGate",
    "GateMisconfiguredError",
    "UnauthorizedError",
    "create_bearer_token_middleware",
]
