"""
Per-attempt HTTPS client for the CAS portal.

Each login attempt gets its own client and therefore its own cookie jar.
Clients are never shared between attempts; the only state that crosses
requests is the cookies CAS sets during one handshake.
"""

import socket
from typing import Dict, List, Optional, Tuple

import httpx

from ...config.provider import HTTPClientConfig

# Headers of a desktop Chrome navigation; the portal rejects obvious bots
BROWSER_HEADERS: Dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
}

TCP_KEEPALIVE_IDLE_SECS = 60


def socket_options(config: HTTPClientConfig) -> List[Tuple[int, int, int]]:
    """Build the socket options applied to every outbound connection."""
    options = [(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)]
    if config.tcp_keepalive:
        options.append((socket.SOL_SOCKET, socket.SO_KEEPALIVE, 1))
        # Not every platform exposes the idle interval
        if hasattr(socket, "TCP_KEEPIDLE"):
            options.append((socket.IPPROTO_TCP, socket.TCP_KEEPIDLE, TCP_KEEPALIVE_IDLE_SECS))
    return options


def build_timeout(config: HTTPClientConfig) -> httpx.Timeout:
    """Connect timeout plus an overall per-operation timeout."""
    return httpx.Timeout(config.request_timeout, connect=config.connect_timeout)


def build_limits(config: HTTPClientConfig) -> httpx.Limits:
    """Connection pool limits for repeated logins."""
    return httpx.Limits(
        max_keepalive_connections=config.max_keepalive_connections,
        keepalive_expiry=config.keepalive_expiry,
    )


def create_session_client(
    config: Optional[HTTPClientConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a new HTTP client with its own cookie jar.

    The client follows redirects (bounded by ``max_redirects``), lets httpx
    negotiate response compression, and sends browser-like default headers.
    There are no retries: one attempt, one client.

    Args:
        config: Client settings; defaults to HTTPClientConfig()
        transport: Optional transport override (tests pass httpx.MockTransport)

    Returns:
        A fresh httpx.AsyncClient; the caller owns it and must close it
    """
    config = config or HTTPClientConfig()

    if transport is None:
        transport = httpx.AsyncHTTPTransport(
            limits=build_limits(config),
            http1=True,
            http2=False,
            socket_options=socket_options(config),
        )

    return httpx.AsyncClient(
        headers=BROWSER_HEADERS,
        cookies=httpx.Cookies(),
        timeout=build_timeout(config),
        follow_redirects=True,
        max_redirects=config.max_redirects,
        transport=transport,
    )
