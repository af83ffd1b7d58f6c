"""
RPC facade over the login service.

Validates requests, bounds each attempt with a deadline, and turns login
errors into RPC errors. It holds no per-request state.
"""

import asyncio
import logging

from ..auth.errors import AuthError, NetworkTimeoutError
from ..auth.service import LoginService
from .errors import ErrorCategory, RPCError, to_rpc_error
from .models import EchoRequest, EchoResponse, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)


class RPCFacade:
    """Remote operations exposed by the service."""

    def __init__(self, login_service: LoginService, deadline_seconds: float = 60.0):
        """
        Args:
            login_service: Performs the portal login
            deadline_seconds: Upper bound for one whole login attempt
        """
        self.login_service = login_service
        self.deadline_seconds = deadline_seconds

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Log a user in to the portal.

        Raises:
            RPCError: Invalid input or a classified login failure
        """
        logger.info(f"Login request received for user: {request.username}")

        if not request.username:
            logger.error("Login failed: Empty username")
            raise RPCError(ErrorCategory.INVALID_ARGUMENT, "Username cannot be empty")

        if not request.password:
            logger.error("Login failed: Empty password")
            raise RPCError(ErrorCategory.INVALID_ARGUMENT, "Password cannot be empty")

        try:
            result = await self._login_within_deadline(request.username, request.password)
        except AuthError as e:
            logger.error(f"Login failed for user {request.username}: {e!r}")
            raise to_rpc_error(e) from e
        except Exception as e:
            logger.exception(f"Unexpected error during login for user {request.username}")
            raise RPCError(ErrorCategory.INTERNAL, "Internal server error") from e

        token, username, password = result
        return LoginResponse(token=token, username=username, password=password)

    async def _login_within_deadline(self, username: str, password: str):
        """Run one attempt; on expiry the attempt is cancelled and its client closed."""
        try:
            return await asyncio.wait_for(
                self.login_service.login(username, password),
                timeout=self.deadline_seconds,
            )
        except asyncio.TimeoutError as e:
            raise NetworkTimeoutError() from e

    async def echo(self, request: EchoRequest) -> EchoResponse:
        """Return the message unchanged."""
        return EchoResponse(message=request.message)
