"""
Example client for the GoMaluum Authentication Service.

Usage:
    gomaluum-auth-client <username> <password> --url http://localhost:50052 --token <secret>

The bearer token defaults to GOMALUUM_AUTH_TOKEN from the environment.
"""

from typing import Any, Dict, Optional

import click
import httpx
from dotenv import load_dotenv


def request_login(
    url: str,
    token: str,
    username: str,
    password: str,
    transport: Optional[httpx.BaseTransport] = None,
) -> httpx.Response:
    """Call the login operation and return the raw response."""
    with httpx.Client(base_url=url, transport=transport, timeout=60.0) as client:
        return client.post(
            "/auth/login",
            json={"username": username, "password": password},
            headers={"Authorization": f"Bearer {token}"},
        )


def describe_error(response: httpx.Response) -> str:
    try:
        body: Dict[str, Any] = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text}"
    return f"{body.get('code', 'error')} ({response.status_code}): {body.get('error')}"


@click.command()
@click.argument("username")
@click.argument("password")
@click.option("--url", default="http://localhost:50052", show_default=True, help="Service base URL")
@click.option("--token", envvar="GOMALUUM_AUTH_TOKEN", required=True, help="Service bearer token")
def main(username: str, password: str, url: str, token: str):
    """Log USERNAME in to i-Ma'luum through the service."""
    try:
        response = request_login(url, token, username, password)
    except httpx.HTTPError as e:
        raise click.ClickException(f"Could not reach {url}: {e}") from e

    if response.status_code != 200:
        raise click.ClickException(describe_error(response))

    body = response.json()
    click.echo("Login successful!")
    click.echo(f"Token: {body['token']}")
    click.echo(f"Username: {body['username']}")


def run():
    load_dotenv()
    main()


if __name__ == "__main__":
    run()
