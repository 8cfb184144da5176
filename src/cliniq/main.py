"""Command-line driver for the auth session flow.

Usage:
    PYTHONPATH=src uv run python -m cliniq.main login test@cliniq.com password123
    PYTHONPATH=src uv run python -m cliniq.main register new@x.com longenough1 longenough1
    PYTHONPATH=src uv run python -m cliniq.main --no-delay demo
"""

#!/usr/bin/env python
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Must run before importing modules that read env vars at import time
load_dotenv()

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from adapter.fake.credential_store import MockCredentialStore
from domain.model.session import SessionSnapshot
from services.auth_session import AuthSessionController
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def _print_snapshot(snapshot: SessionSnapshot) -> None:
    print(json.dumps(snapshot.to_dict()))


async def run_demo(controller: AuthSessionController) -> None:
    """Walk through the main flows against the seeded mock store."""
    unsubscribe = controller.subscribe(_print_snapshot)
    try:
        await controller.login('', 'password123')
        await controller.login('test@cliniq.com', 'wrong-password')
        await controller.login('TEST@CLINIQ.com', 'password123')
        controller.logout()
        await controller.register('test@cliniq.com', 'password123', 'password123')
        await controller.register('new@cliniq.com', 'short', 'short')
        await controller.register('new@cliniq.com', 'longenough1', 'longenough1')
        controller.logout()
        await controller.login('new@cliniq.com', 'longenough1')
    finally:
        unsubscribe()


async def run(args: argparse.Namespace) -> SessionSnapshot:
    store = MockCredentialStore(min_delay=0, max_delay=0) if args.no_delay else MockCredentialStore()
    controller = AuthSessionController(store)

    if args.command == 'login':
        await controller.login(args.email, args.password)
    elif args.command == 'register':
        await controller.register(args.email, args.password, args.confirm_password)
    else:
        await run_demo(controller)

    return controller.snapshot()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ClinIQ authentication flow against the mock credential store")
    parser.add_argument("--no-delay", action="store_true", help="Disable simulated network latency")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (default: INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Log in with email and password")
    login.add_argument("email")
    login.add_argument("password")

    register = subparsers.add_parser("register", help="Create an account and log in")
    register.add_argument("email")
    register.add_argument("password")
    register.add_argument("confirm_password")

    subparsers.add_parser("demo", help="Run a scripted session and print every state change")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_structured_logging(args.log_level)

    snapshot = asyncio.run(run(args))
    _print_snapshot(snapshot)
    return 0 if snapshot.is_authenticated else 1


if __name__ == "__main__":
    sys.exit(main())
