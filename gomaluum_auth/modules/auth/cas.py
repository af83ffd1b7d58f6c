"""
CAS login flow for i-Ma'luum.

The portal only hands out its session cookie on a navigation *after* the
credentials were accepted, so a login is always three requests on one
cookie jar:

1. GET the CAS login page to open a CAS session
2. POST the credentials form
3. GET the i-Ma'luum home page and read ``MOD_AUTH_CAS`` from its Set-Cookie

A fresh HTTP client (and cookie jar) is built for every attempt, so any
number of logins can run concurrently without sharing state. A failed
attempt is never resumed; callers retry with a new attempt.
"""

import asyncio
import logging
from typing import Callable, Dict, Optional

import httpx

from ...config.constants import CAS_EVENT_ID, CAS_EXECUTION
from ...config.provider import HTTPClientConfig, PortalConfig
from ..http.client import create_session_client
from .errors import (
    AuthCookieNotFoundError,
    LoginFailedError,
    LoginStage,
    RequestFailedError,
    URLParseFailedError,
)
from .service import LoginResult

logger = logging.getLogger(__name__)

ClientFactory = Callable[[HTTPClientConfig], httpx.AsyncClient]

PASSWORD_MASK = "********"
BODY_PREVIEW_CHARS = 500


def create_form_payload(username: str, password: str) -> Dict[str, str]:
    """
    Build the CAS login form.

    Only ``username`` and ``password`` vary; the other three fields are
    fixed by the portal's CAS deployment.
    """
    return {
        "username": username,
        "password": password,
        "execution": CAS_EXECUTION,
        "_eventId": CAS_EVENT_ID,
        "geolocation": "",
    }


def parse_portal_url(value: str) -> httpx.URL:
    """
    Parse a configured portal URL.

    Raises:
        URLParseFailedError: If the URL is malformed or not absolute http(s)
    """
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL as e:
        raise URLParseFailedError(value, str(e)) from e

    if url.scheme not in ("http", "https") or not url.host:
        raise URLParseFailedError(value)
    return url


def origin_of(url: httpx.URL) -> str:
    """Scheme, host and non-default port of a URL, as sent in ``Origin``."""
    origin = f"{url.scheme}://{url.host}"
    if url.port is not None:
        origin += f":{url.port}"
    return origin


def find_cookie(response: httpx.Response, name: str) -> Optional[str]:
    """
    Look for a cookie set during one navigation.

    Only the Set-Cookie headers of this response and of the redirect hops
    that led to it are examined, newest first. Cookies already sitting in
    the client's jar from earlier steps are ignored.

    One response may set the same name for several paths. The jar yields
    cookies ordered by domain and then path, so the outcome does not depend
    on header order.
    """
    for hop in reversed([*response.history, response]):
        for cookie in hop.cookies.jar:
            if cookie.name == name:
                return cookie.value
    return None


def is_success_or_redirect(status_code: int) -> bool:
    """2xx or 3xx status class."""
    return 200 <= status_code < 400


class CASLoginFlow:
    """
    Runs the CAS handshake and extracts the session token.

    Implements the LoginService protocol.
    """

    def __init__(
        self,
        portal: Optional[PortalConfig] = None,
        http: Optional[HTTPClientConfig] = None,
        client_factory: ClientFactory = create_session_client,
    ):
        """
        Initialize the login flow.

        Args:
            portal: CAS endpoints and cookie name
            http: Settings for the per-attempt HTTP client
            client_factory: Builds a new client per attempt (injectable for tests)
        """
        self.portal = portal or PortalConfig()
        self.http = http or HTTPClientConfig()
        self._client_factory = client_factory

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Log in to i-Ma'luum and return the MOD_AUTH_CAS token.

        Args:
            username: Portal username
            password: Portal password

        Returns:
            LoginResult(token, username, password)

        Raises:
            URLParseFailedError: A configured portal URL is malformed
            RequestFailedError: Transport failure, tagged with the stage
            LoginFailedError: The portal rejected the credentials
            AuthCookieNotFoundError: No session cookie after the handshake
        """
        home_url = parse_portal_url(self.portal.home_url)
        cas_page_url = parse_portal_url(self.portal.cas_page_url)
        login_url = parse_portal_url(self.portal.login_url)

        form = create_form_payload(username, password)

        async with self._client_factory(self.http) as client:
            await self._bootstrap(client, cas_page_url)
            response = await self._submit(client, login_url, cas_page_url, form)
            self._verify(response)
            token = await self._extract_token(client, home_url)

        logger.info(f"Login successful for user: {username}")
        return LoginResult(token=token, username=username, password=password)

    async def _send(
        self,
        client: httpx.AsyncClient,
        stage: LoginStage,
        method: str,
        url: httpx.URL,
        **kwargs,
    ) -> httpx.Response:
        """
        Send one request of the handshake.

        The body is read in full before returning, so every Set-Cookie of
        the response (and its redirect hops) is in the jar before the next
        step runs. httpx bounds each read and write; the whole request,
        redirects and body included, is bounded by ``request_timeout``.
        """
        timeout = self.http.request_timeout
        try:
            response = await asyncio.wait_for(
                client.request(method, url, **kwargs), timeout=timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"{stage.value} {method} {url} exceeded {timeout}s")
            cause = httpx.TimeoutException(f"no complete response within {timeout}s")
            raise RequestFailedError(stage, cause) from e
        except httpx.RequestError as e:
            logger.error(f"{stage.value} {method} {url} failed: {e!r}")
            raise RequestFailedError(stage, e) from e

        logger.info(
            f"{stage.value} response: {response.status_code} {response.reason_phrase} "
            f"final URL {response.url} after {len(response.history)} redirect(s), "
            f"{len(response.content)} bytes"
        )
        logger.debug(
            f"{stage.value} body preview:\n{response.text[:BODY_PREVIEW_CHARS]}"
        )
        return response

    async def _bootstrap(self, client: httpx.AsyncClient, cas_page_url: httpx.URL) -> None:
        """Step 1: open a CAS session."""
        logger.info(f"=== STEP 1: GET {cas_page_url} ===")
        response = await self._send(client, LoginStage.BOOTSTRAP, "GET", cas_page_url)

        if not is_success_or_redirect(response.status_code):
            logger.warning(f"Bootstrap returned unexpected status: {response.status_code}")

    async def _submit(
        self,
        client: httpx.AsyncClient,
        login_url: httpx.URL,
        cas_page_url: httpx.URL,
        form: Dict[str, str],
    ) -> httpx.Response:
        """Step 2: post the credentials form."""
        logger.info(f"=== STEP 2: POST {login_url} ===")
        masked = {**form, "password": PASSWORD_MASK}
        logger.info(f"Form data: {masked}")

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Referer": str(cas_page_url),
            "Origin": origin_of(login_url),
        }
        return await self._send(
            client, LoginStage.SUBMIT, "POST", login_url, data=form, headers=headers
        )

    def _verify(self, response: httpx.Response) -> None:
        """
        Decide whether the portal accepted the credentials.

        The portal answers a bad password with a 200 page, so the failure
        markers are checked before the status class.
        """
        body = response.text
        if any(marker in body for marker in self.portal.failure_markers):
            logger.error("Login failed: failure marker found in portal response")
            raise LoginFailedError()

        if not is_success_or_redirect(response.status_code):
            logger.error(f"Login submission returned error status: {response.status_code}")
            raise LoginFailedError()

        logger.info("=== AUTHENTICATION FLOW COMPLETED ===")

    async def _extract_token(self, client: httpx.AsyncClient, home_url: httpx.URL) -> str:
        """Step 3: navigate to the home page and read the session cookie."""
        logger.info(f"=== STEP 3: GET {home_url} ===")
        response = await self._send(client, LoginStage.EXTRACT, "GET", home_url)

        token = find_cookie(response, self.portal.auth_cookie_name)
        if token is None:
            logger.error(f"Authentication cookie '{self.portal.auth_cookie_name}' not found")
            raise AuthCookieNotFoundError()
        return token
