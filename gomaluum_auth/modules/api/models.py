"""
gomaluum-auth request and response models.

Emptiness of credentials is checked by the facade, not here, so that it is
reported as an invalid argument rather than a schema error.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Portal credentials to log in with."""

    username: str = Field(..., description="i-Ma'luum username (matric number)")
    password: str = Field(..., description="i-Ma'luum password")


class LoginResponse(BaseModel):
    """Successful login."""

    token: str = Field(..., description="MOD_AUTH_CAS session token")
    username: str
    password: str


class EchoRequest(BaseModel):
    """Message to echo back."""

    message: str


class EchoResponse(BaseModel):
    """Echoed message."""

    message: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed call."""

    error: str
    code: str
    status: int
