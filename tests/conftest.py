"""
Shared pytest fixtures for gomaluum-auth tests.

This module provides common fixtures including:
- MockPortal: an in-process CAS portal built on httpx.MockTransport
- Portal/HTTP configuration pointing at the mock portal
- A static ConfigProvider for building the FastAPI app
"""

import inspect
import os
import sys
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Tuple, Union

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gomaluum_auth.config import AuthConfig, HTTPClientConfig, PortalConfig, ServerConfig
from gomaluum_auth.modules.auth import CASLoginFlow
from gomaluum_auth.modules.http import create_session_client

PORTAL_ROOT = "https://portal.example.edu"
HOME_URL = f"{PORTAL_ROOT}/"
CAS_PAGE_URL = f"{PORTAL_ROOT}/cas/login?service=home"
LOGIN_URL = f"{PORTAL_ROOT}/cas/login?service=home&submit=1"

Responder = Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]


# =============================================================================
# Mock Portal Infrastructure
# =============================================================================

def respond(
    status: int = 200,
    text: str = "",
    set_cookies: Iterable[str] = (),
    headers: Optional[Dict[str, str]] = None,
) -> Responder:
    """Build a responder returning a fresh response on every call."""
    set_cookies = list(set_cookies)

    def responder(request: httpx.Request) -> httpx.Response:
        response_headers = list((headers or {}).items())
        response_headers += [("Set-Cookie", cookie) for cookie in set_cookies]
        return httpx.Response(status, text=text, headers=response_headers)

    return responder


def request_cookie(request: httpx.Request, name: str) -> Optional[str]:
    """Read one cookie from an outgoing request's Cookie header."""
    cookie = SimpleCookie()
    cookie.load(request.headers.get("cookie", ""))
    return cookie[name].value if name in cookie else None


class MockPortal:
    """
    Mock CAS portal with (method, URL)-matched responders.

    Usage:
        def test_login(mock_portal, login_flow):
            mock_portal.on("GET", CAS_PAGE_URL, respond(200, "<form>"))
            ...
            assert mock_portal.methods == ["GET", "POST", "GET"]
    """

    def __init__(self):
        self._routes: Dict[Tuple[str, str], Responder] = {}
        self.calls: List[httpx.Request] = []
        self.clients: List[httpx.AsyncClient] = []

    def on(self, method: str, url: str, responder: Responder) -> "MockPortal":
        """Register a responder; returns self for chaining."""
        self._routes[(method.upper(), url)] = responder
        return self

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        responder = self._routes.get((request.method, str(request.url)))
        if responder is None:
            return httpx.Response(404, text=f"no mock for {request.method} {request.url}")
        result = responder(request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client_factory(self, config: HTTPClientConfig) -> httpx.AsyncClient:
        """Session client factory routed to this portal."""
        client = create_session_client(config, transport=self.transport)
        self.clients.append(client)
        return client

    @property
    def methods(self) -> List[str]:
        return [call.method for call in self.calls]

    @property
    def urls(self) -> List[str]:
        return [str(call.url) for call in self.calls]

    def happy_path(self, token: str = "abc123") -> "MockPortal":
        """Register a portal that accepts any credentials."""
        self.on("GET", CAS_PAGE_URL, respond(
            200, "<form id='fm1'>", set_cookies=["JSESSIONID=cas-session; Path=/"]
        ))
        self.on("POST", LOGIN_URL, respond(302, set_cookies=["TGC=granting-ticket; Path=/"]))
        self.on("GET", HOME_URL, respond(
            200, "<html>home</html>", set_cookies=[f"MOD_AUTH_CAS={token}; Path=/"]
        ))
        return self


@pytest.fixture
def mock_portal():
    """Empty mock portal."""
    return MockPortal()


@pytest.fixture
def portal_config():
    """Portal configuration pointing at the mock portal."""
    return PortalConfig(home_url=HOME_URL, cas_page_url=CAS_PAGE_URL, login_url=LOGIN_URL)


@pytest.fixture
def http_config():
    return HTTPClientConfig()


@pytest.fixture
def login_flow(portal_config, http_config, mock_portal):
    """CASLoginFlow whose session clients talk to the mock portal."""
    return CASLoginFlow(
        portal=portal_config,
        http=http_config,
        client_factory=mock_portal.client_factory,
    )


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class StaticConfigProvider:
    """ConfigProvider with fixed values."""

    secret: Optional[str] = "test-secret"
    portal: PortalConfig = field(default_factory=PortalConfig)
    http: HTTPClientConfig = field(default_factory=HTTPClientConfig)
    login_deadline: float = 60.0

    def get_server_config(self) -> ServerConfig:
        return ServerConfig(host="127.0.0.1", port=50052, log_level="INFO", debug=False)

    def get_auth_config(self) -> AuthConfig:
        return AuthConfig(secret=self.secret)

    def get_http_config(self) -> HTTPClientConfig:
        return self.http

    def get_portal_config(self) -> PortalConfig:
        return self.portal

    def get_login_deadline(self) -> float:
        return self.login_deadline


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring the live portal"
    )
