"""
Config Module - Black Box Interface

Purpose: Application configuration management
Interface: ConfigProvider protocol, EnvConfigProvider
Hidden: Environment parsing, defaults

Can be replaced with any provider that returns the same dataclasses.
"""

from .provider import (
    AuthConfig,
    ConfigProvider,
    EnvConfigProvider,
    HTTPClientConfig,
    PortalConfig,
    ServerConfig,
    parse_bind_addr,
)

__all__ = [
    "AuthConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "HTTPClientConfig",
    "PortalConfig",
    "ServerConfig",
    "parse_bind_addr",
]
