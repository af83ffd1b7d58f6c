"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

from .constants import (
    AUTH_COOKIE_NAME,
    IMALUUM_CAS_PAGE,
    IMALUUM_LOGIN_PAGE,
    IMALUUM_PAGE,
)


@dataclass(frozen=True)
class ServerConfig:
    """Server configuration."""
    host: str
    port: int
    log_level: str
    debug: bool
    cas_log_level: Optional[str] = None


@dataclass(frozen=True)
class AuthConfig:
    """
    Authorization gate configuration.

    ``secret`` is the static bearer token expected from callers. ``None``
    means the process was started without one.
    """
    secret: Optional[str]

    @property
    def is_configured(self) -> bool:
        """Check if a bearer secret was supplied."""
        return self.secret is not None


@dataclass(frozen=True)
class HTTPClientConfig:
    """Outbound HTTP client configuration (i-Ma'luum can be slow)."""
    connect_timeout: float = 10.0
    request_timeout: float = 30.0
    max_keepalive_connections: int = 10
    keepalive_expiry: float = 90.0
    max_redirects: int = 10
    tcp_keepalive: bool = True


@dataclass(frozen=True)
class PortalConfig:
    """CAS portal endpoints and the name of the session cookie it issues."""
    home_url: str = IMALUUM_PAGE
    cas_page_url: str = IMALUUM_CAS_PAGE
    login_url: str = IMALUUM_LOGIN_PAGE
    auth_cookie_name: str = AUTH_COOKIE_NAME
    failure_markers: Tuple[str, ...] = ("Login failed", "Invalid credentials")


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_server_config(self) -> ServerConfig:
        """Get server configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authorization gate configuration."""
        ...

    def get_http_config(self) -> HTTPClientConfig:
        """Get outbound HTTP client configuration."""
        ...

    def get_portal_config(self) -> PortalConfig:
        """Get CAS portal configuration."""
        ...

    def get_login_deadline(self) -> float:
        """Get the deadline, in seconds, for one whole login attempt."""
        ...


def parse_bind_addr(value: str) -> Tuple[str, int]:
    """
    Split a ``host:port`` bind address.

    IPv6 hosts may be bracketed (``[::1]:50052``).

    Raises:
        ValueError: If the port is missing or not a number
    """
    host, sep, port = value.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"Invalid BIND_ADDR '{value}': expected host:port")
    return host.strip("[]") or "0.0.0.0", int(port)


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_server_config(self) -> ServerConfig:
        """Get server configuration from environment variables."""
        host, port = parse_bind_addr(os.getenv("BIND_ADDR", "0.0.0.0:50052"))
        return ServerConfig(
            host=host,
            port=port,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            cas_log_level=os.getenv("CAS_LOG_LEVEL"),
        )

    def get_auth_config(self) -> AuthConfig:
        """
        Get authorization gate configuration from environment variables.

        A missing GOMALUUM_AUTH_TOKEN is not raised here: the gate reports
        it on every call as a server misconfiguration.
        """
        return AuthConfig(secret=os.getenv("GOMALUUM_AUTH_TOKEN"))

    def get_http_config(self) -> HTTPClientConfig:
        """Get outbound HTTP client configuration from environment variables."""
        return HTTPClientConfig(
            connect_timeout=float(os.getenv("HTTP_CONNECT_TIMEOUT", "10")),
            request_timeout=float(os.getenv("HTTP_REQUEST_TIMEOUT", "30")),
        )

    def get_portal_config(self) -> PortalConfig:
        """Portal endpoints are fixed by the i-Ma'luum deployment."""
        return PortalConfig()

    def get_login_deadline(self) -> float:
        """Get the login attempt deadline from environment variables."""
        return float(os.getenv("LOGIN_DEADLINE", "60"))
