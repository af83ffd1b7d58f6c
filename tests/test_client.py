"""
Tests for the example command-line client.
"""

from unittest.mock import patch

import httpx
from click.testing import CliRunner

from gomaluum_auth.client import describe_error, main, request_login


def test_request_login_sends_token_and_credentials():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["authorization"] = request.headers["authorization"]
        seen["body"] = request.read()
        return httpx.Response(200, json={"token": "abc123", "username": "alice", "password": "secret"})

    response = request_login(
        "http://service.test", "s3cret", "alice", "secret", transport=httpx.MockTransport(handler)
    )

    assert response.status_code == 200
    assert seen["path"] == "/auth/login"
    assert seen["authorization"] == "Bearer s3cret"
    assert b'"username":"alice"' in seen["body"].replace(b" ", b"")


def test_describe_error():
    response = httpx.Response(
        401, json={"error": "No valid auth token", "code": "unauthenticated", "status": 401}
    )

    assert describe_error(response) == "unauthenticated (401): No valid auth token"


def test_describe_error_without_json():
    assert describe_error(httpx.Response(502, text="Bad Gateway")) == "HTTP 502: Bad Gateway"


@patch("gomaluum_auth.client.request_login")
def test_cli_success(mock_request):
    mock_request.return_value = httpx.Response(
        200, json={"token": "abc123", "username": "alice", "password": "secret"}
    )

    result = CliRunner().invoke(main, ["alice", "secret", "--token", "s3cret"])

    assert result.exit_code == 0
    assert "Login successful!" in result.output
    assert "Token: abc123" in result.output
    mock_request.assert_called_once_with("http://localhost:50052", "s3cret", "alice", "secret")


@patch("gomaluum_auth.client.request_login")
def test_cli_reads_token_from_env(mock_request):
    mock_request.return_value = httpx.Response(
        200, json={"token": "abc123", "username": "alice", "password": "secret"}
    )

    result = CliRunner().invoke(main, ["alice", "secret"], env={"GOMALUUM_AUTH_TOKEN": "from-env"})

    assert result.exit_code == 0
    assert mock_request.call_args.args[1] == "from-env"


@patch("gomaluum_auth.client.request_login")
def test_cli_failure(mock_request):
    mock_request.return_value = httpx.Response(
        401,
        json={"error": "Authentication cookie not found", "code": "unauthenticated", "status": 401},
    )

    result = CliRunner().invoke(main, ["alice", "wrong", "--token", "s3cret"])

    assert result.exit_code == 1
    assert "Authentication cookie not found" in result.output


@patch("gomaluum_auth.client.request_login")
def test_cli_unreachable(mock_request):
    mock_request.side_effect = httpx.ConnectError("connection refused")

    result = CliRunner().invoke(main, ["alice", "secret", "--token", "s3cret"])

    assert result.exit_code == 1
    assert "Could not reach" in result.output
