"""
Login Service interface following Black Box Design principles.

This module provides:
- A standardized login result
- The protocol any login implementation must satisfy
"""

from dataclasses import astuple, dataclass
from typing import Iterator, Protocol


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful portal login."""
    token: str
    username: str
    password: str

    def __iter__(self) -> Iterator[str]:
        return iter(astuple(self))


class LoginService(Protocol):
    """Protocol for login services."""

    async def login(self, username: str, password: str) -> LoginResult:
        """
        Log in to the portal.

        Args:
            username: Portal username (non-empty)
            password: Portal password (non-empty)

        Returns:
            LoginResult with the session token

        Raises:
            AuthError: Any classified login failure
        """
        ...
