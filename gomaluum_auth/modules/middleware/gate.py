"""Static bearer-token authorization gate."""

import secrets
from typing import Mapping, Optional, Union

from ...config.provider import AuthConfig
from ..api.errors import ErrorCategory, RPCError

AUTHORIZATION_KEY = "authorization"

MetadataValue = Union[str, bytes]


class UnauthorizedError(RPCError):
    """Caller did not present the expected bearer token."""

    def __init__(self, message: str = "No valid auth token"):
        super().__init__(ErrorCategory.UNAUTHENTICATED, message)


class GateMisconfiguredError(RPCError):
    """The process was started without a bearer secret."""

    def __init__(self, message: str = "Server misconfiguration: missing auth token"):
        super().__init__(ErrorCategory.INTERNAL, message)


def get_metadata_value(metadata: Mapping[str, MetadataValue], key: str) -> Optional[MetadataValue]:
    """Case-insensitive metadata lookup (header semantics)."""
    value = metadata.get(key)
    if value is not None:
        return value
    for name, candidate in metadata.items():
        if name.lower() == key:
            return candidate
    return None


class BearerTokenGate:
    """
    Checks call metadata against ``"Bearer " + secret``.

    The secret is injected once at construction and never re-read. The
    check does no I/O.
    """

    def __init__(self, config: AuthConfig):
        self._expected: Optional[bytes] = None
        if config.secret is not None:
            self._expected = f"Bearer {config.secret}".encode("utf-8")

    @property
    def is_configured(self) -> bool:
        return self._expected is not None

    def authorize(self, metadata: Mapping[str, MetadataValue]) -> None:
        """
        Authorize a call.

        Args:
            metadata: Header-like key/value pairs of the incoming call. Byte
                values are compared as received; text values as UTF-8

        Raises:
            GateMisconfiguredError: No secret was configured
            UnauthorizedError: Header missing or not an exact match
        """
        if self._expected is None:
            raise GateMisconfiguredError()

        presented = get_metadata_value(metadata, AUTHORIZATION_KEY)
        if presented is None:
            raise UnauthorizedError()

        if isinstance(presented, str):
            presented = presented.encode("utf-8")

        if not secrets.compare_digest(presented, self._expected):
            raise UnauthorizedError()
