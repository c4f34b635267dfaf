"""
Task Attachments - demo login tool.

Authenticates against the demo user directory and prints the issued
session token, or checks a token issued earlier.

Usage:
    python main.py login --username admin
    python main.py verify <token>
    python main.py hash

Set JWT_SECRET so tokens printed by one run verify in the next.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from modules.auth import Credentials
from modules.auth.service import AuthService, get_auth_service
from shared.config import get_settings

console = Console()


async def run_login(service: AuthService, username: str, password: str) -> int:
    """Authenticate and print the token. Returns the process exit code."""
    result = await service.authenticate(Credentials(username=username, password=password))
    if not result.success:
        console.print(f"[red]Error:[/red] {result.error}")
        return 1

    table = Table(title="Authenticated", show_header=False)
    table.add_row("id", str(result.user.id))
    table.add_row("username", result.user.username)
    table.add_row("email", result.user.email)
    console.print(table)
    console.print(f"[bold]Token:[/bold] {result.token}", soft_wrap=True)
    return 0


async def run_verify(service: AuthService, token: str) -> int:
    """Validate a token and print its claims."""
    claims = await service.validate_token(token)
    if claims is None:
        console.print("[red]Error:[/red] Invalid or expired token")
        return 1

    table = Table(title="Token claims", show_header=False)
    table.add_row("userId", str(claims.user_id))
    table.add_row("username", claims.username)
    table.add_row("email", claims.email)
    table.add_row("issuer", claims.iss)
    table.add_row("expires", claims.expires_at.isoformat())
    console.print(table)
    return 0


async def run_hash(service: AuthService, password: str) -> int:
    """Print a bcrypt digest for a password."""
    digest = await service.hash_password(password)
    if digest is None:
        console.print("[red]Error:[/red] Internal server error")
        return 1

    console.print(digest, soft_wrap=True)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Task Attachments demo login tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Authenticate and print a session token")
    login.add_argument("--username", "-u", required=True, help="Username to log in as")
    login.add_argument(
        "--password", "-p",
        help="Password (prompted for when omitted)",
    )

    verify = subparsers.add_parser("verify", help="Validate a session token")
    verify.add_argument("token", help="Token printed by the login command")

    hash_cmd = subparsers.add_parser("hash", help="Hash a password for storage")
    hash_cmd.add_argument("--password", "-p", help="Password (prompted for when omitted)")

    return parser


def main(argv: Optional[list[str]] = None, service: Optional[AuthService] = None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments, defaults to sys.argv
        service: Auth service to use, defaults to the module singleton

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    service = service or get_auth_service()

    if args.command == "login":
        password = args.password
        if password is None:
            password = Prompt.ask("Password", password=True, console=console)
        return asyncio.run(run_login(service, args.username, password))

    if args.command == "verify":
        return asyncio.run(run_verify(service, args.token))

    password = args.password
    if password is None:
        password = Prompt.ask("Password", password=True, console=console)
    return asyncio.run(run_hash(service, password))


if __name__ == "__main__":
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    sys.exit(main())
