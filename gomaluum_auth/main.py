#!/usr/bin/env python3
"""
GoMaluum Authentication Service - Main Entry Point

This is the thin orchestration layer that:
1. Loads configuration
2. Builds the gate and the login service through the factory
3. Exposes the RPC operations over HTTP

All login logic is in the modules, following black box principles.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import click
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gomaluum_auth import __version__
from gomaluum_auth.config import ConfigProvider, EnvConfigProvider
from gomaluum_auth.logging_config import configure_logging, get_logging_config
from gomaluum_auth.modules.api import (
    EchoRequest,
    EchoResponse,
    ErrorCategory,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RPCError,
    RPCFacade,
)
from gomaluum_auth.modules.auth.factory import AuthFactory
from gomaluum_auth.modules.auth.service import LoginService
from gomaluum_auth.modules.middleware import create_bearer_token_middleware

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
    504: {"model": ErrorResponse},
}


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    login_service: Optional[LoginService] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config_provider: Configuration source (defaults to the environment)
        login_service: Optional LoginService override

    Returns:
        Configured FastAPI app with every operation behind the bearer gate
    """
    config_provider = config_provider or EnvConfigProvider()

    gate = AuthFactory.build_gate(config_provider)
    if login_service is None:
        login_service = AuthFactory.build_login_service(config_provider)
    facade = RPCFacade(login_service, deadline_seconds=config_provider.get_login_deadline())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting GoMaluum Authentication Service...")
        yield
        logger.info("GoMaluum Authentication Service shutdown complete")

    app = FastAPI(
        title="GoMaluum Authentication Service",
        description="Logs in to i-Ma'luum through CAS and returns the session token",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.facade = facade
    app.state.gate = gate

    auth_middleware = create_bearer_token_middleware(gate)

    @app.middleware("http")
    async def authorize(request: Request, call_next):
        return await auth_middleware(request, call_next)

    @app.post("/auth/login", response_model=LoginResponse, responses=ERROR_RESPONSES)
    async def login(body: LoginRequest) -> LoginResponse:
        """
        Log in to i-Ma'luum.

        Returns:
            200: token, username and password
            400: Empty username or password
            401: Bad bearer token, rejected credentials or no session cookie
            503: Portal unreachable
            504: Login attempt exceeded its deadline
        """
        return await facade.login(body)

    @app.post("/echo", response_model=EchoResponse, responses=ERROR_RESPONSES)
    async def echo(body: EchoRequest) -> EchoResponse:
        """Echo the message back (requires the bearer token)."""
        return await facade.echo(body)

    @app.get("/health")
    async def health():
        """Liveness probe; not gated."""
        return {"status": "healthy", "auth_configured": gate.is_configured}

    # Error handlers

    @app.exception_handler(RPCError)
    async def rpc_error_handler(request: Request, exc: RPCError):
        """Render RPC errors with their category's status code."""
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are invalid arguments."""
        logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
        error = RPCError(ErrorCategory.INVALID_ARGUMENT, "Malformed request body")
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    return app


def print_intro(host: str, port: int) -> None:
    click.secho(
        r"""
   ____    _    ____
  / ___|  / \  / ___|
 | |  _  / _ \ \___ \
 | |_| |/ ___ \ ___) |
  \____/_/   \_\____/
GoMaluum Authentication Service
""",
        fg="red",
    )
    click.secho("=" * 84, fg="yellow")
    click.secho(f"Server listening on {host}:{port}", fg="blue")
    click.secho("=" * 84, fg="yellow")


@click.command()
@click.option("--host", "host", default=None, help="Bind host (overrides BIND_ADDR)")
@click.option("--port", "port", type=int, default=None, help="Bind port (overrides BIND_ADDR)")
@click.option("--reload/--no-reload", "reload", default=None, help="Auto-reload (overrides DEBUG)")
def main(host: Optional[str], port: Optional[int], reload: Optional[bool]):
    """Run the GoMaluum Authentication Service."""
    load_dotenv()

    server_config = EnvConfigProvider().get_server_config()
    host = host or server_config.host
    port = port or server_config.port
    reload = server_config.debug if reload is None else reload

    configure_logging(server_config.log_level, server_config.cas_log_level)
    print_intro(host, port)

    uvicorn.run(
        "gomaluum_auth.main:create_app",
        factory=True,
        host=host,
        port=port,
        log_level=server_config.log_level.lower(),
        reload=reload,
        log_config=get_logging_config(server_config.log_level, server_config.cas_log_level),
    )


if __name__ == "__main__":
    main()
