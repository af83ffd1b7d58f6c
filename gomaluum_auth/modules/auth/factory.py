"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the login flow and the authorization gate from configuration
- Wires dependencies together
- Returns only the public interfaces
"""

import logging
from typing import Optional

from ...config.provider import ConfigProvider
from ..middleware.gate import BearerTokenGate
from .cas import CASLoginFlow, ClientFactory
from .service import LoginService

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build_login_service(
        config_provider: ConfigProvider,
        client_factory: Optional[ClientFactory] = None,
    ) -> LoginService:
        """
        Build the portal login service.

        Args:
            config_provider: Configuration provider
            client_factory: Optional HTTP client factory override

        Returns:
            LoginService backed by the CAS flow
        """
        portal = config_provider.get_portal_config()
        http = config_provider.get_http_config()

        logger.info(
            f"Building CAS login flow (connect timeout {http.connect_timeout}s, "
            f"request timeout {http.request_timeout}s)"
        )
        if client_factory is None:
            return CASLoginFlow(portal=portal, http=http)
        return CASLoginFlow(portal=portal, http=http, client_factory=client_factory)

    @staticmethod
    def build_gate(config_provider: ConfigProvider) -> BearerTokenGate:
        """
        Build the static bearer-token gate.

        The secret is read once here; a missing secret is logged and left
        for the gate to report on every call.
        """
        auth_config = config_provider.get_auth_config()
        if not auth_config.is_configured:
            logger.error(
                "GOMALUUM_AUTH_TOKEN is not set - every request will be rejected "
                "as a server misconfiguration"
            )
        return BearerTokenGate(auth_config)
