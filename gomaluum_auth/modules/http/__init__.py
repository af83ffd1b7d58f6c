"""
HTTP Module - Black Box Interface

Purpose: Build outbound HTTP clients for the CAS portal
Interface: create_session_client()
Hidden: Pool limits, timeouts, socket options, browser headers
"""

from .client import BROWSER_HEADERS, create_session_client

__all__ = ["BROWSER_HEADERS", "create_session_client"]
