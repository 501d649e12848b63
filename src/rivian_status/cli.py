"""Command line interface for Rivian vehicle status."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from .const import ENV_EMAIL, ENV_PASSWORD
from .exceptions import RivianApiException, RivianPersistenceError
from .storage import SessionStatus, SessionStore
from .tools import SIGNED_IN, RivianTools

_LOGGER = logging.getLogger(__name__)

COMMANDS = {
    "user": ("Show the account and its vehicles", RivianTools.user_info),
    "ota": ("Check software update status", RivianTools.ota_status),
    "charging": ("Show the active charging session", RivianTools.charging_session),
    "history": ("List completed charging sessions", RivianTools.charging_history),
    "schedule": ("List charging schedules", RivianTools.charging_schedule),
    "drivers": ("List drivers and phone keys", RivianTools.drivers_and_keys),
}


def prompt(question: str) -> str:
    """Ask on stderr so stdout only carries the report."""
    print(question, end="", file=sys.stderr, flush=True)
    return input().strip()


async def interactive_login(tools: RivianTools) -> None:
    """Log in with environment credentials, prompting for anything missing."""
    auth = tools.client.auth
    email = os.environ.get(ENV_EMAIL) or prompt("Rivian email: ")
    password = os.environ.get(ENV_PASSWORD) or getpass.getpass("Rivian password: ")

    await auth.create_csrf_token()
    if await auth.login(email, password):
        await auth.validate_otp(email, prompt("Verification code: "))

    try:
        tools.store.save(auth)
    except RivianPersistenceError as err:
        _LOGGER.warning("%s", err)


async def ensure_auth(tools: RivianTools) -> None:
    """Reuse the saved session or log in interactively."""
    if tools.restore() is not SessionStatus.AUTHENTICATED:
        await interactive_login(tools)


async def run(args: argparse.Namespace) -> int:
    """Execute the parsed command and print its output."""
    store = SessionStore(args.session_file) if args.session_file else None
    tools = RivianTools(store=store)
    try:
        if args.command == "login":
            await interactive_login(tools)
            print(SIGNED_IN)
        elif args.command == "otp":
            tools.restore()
            print(await tools.submit_otp(args.code))
        else:
            await ensure_auth(tools)
            if args.command == "state":
                print(await tools.vehicle_state(args.properties))
            else:
                print(await COMMANDS[args.command][1](tools))
    except RivianApiException as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    finally:
        await tools.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="rivian-status", description="Read-only status of your Rivian."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "--session-file", type=Path, help="where the login session is kept"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("login", help="Log in and save the session")
    otp = subparsers.add_parser("otp", help="Submit a pending verification code")
    otp.add_argument("code")
    state = subparsers.add_parser("state", help="Show full vehicle state")
    state.add_argument(
        "properties", nargs="*", help="only these properties (default: all)"
    )
    for name, (help_text, _) in COMMANDS.items():
        subparsers.add_parser(name, help=help_text)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[rivian-status] %(levelname)s %(name)s: %(message)s",
    )
    return asyncio.run(run(args))
