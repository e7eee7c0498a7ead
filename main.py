#!/usr/bin/env python3
"""
COVID-19 India Portal -- operator command line.

Users and states are provisioned out-of-band; the HTTP API only reads them.
This CLI is that out-of-band path.

Usage:
  python main.py init-db
  python main.py create-user christopher_phillips
  python main.py create-user christopher_phillips --password 'christy@123'
  python main.py set-password christopher_phillips
  python main.py add-state "Andaman and Nicobar Islands" 380581
  python main.py serve --host 127.0.0.1 --port 3000

Environment variables:
  SECRET_KEY     Required unless DEBUG=true. At least 32 characters.
  DATABASE_URL   SQLAlchemy URL. Defaults to ./covid19IndiaPortal.db.
"""

import argparse
import getpass
import sys
from typing import Optional

from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserStore
from auth.tokens import hash_password
from portal.models import State
from portal.store import PortalStore


def _read_password(given: Optional[str]) -> Optional[str]:
    """Return the --password value or prompt twice for one. None on mismatch."""
    if given:
        return given
    first = getpass.getpass("Password: ")
    second = getpass.getpass("Repeat password: ")
    if not first or first != second:
        print("  [!] Passwords are empty or do not match.")
        return None
    return first


def _hash_or_report(password: str) -> Optional[str]:
    try:
        return hash_password(password)
    except ValueError as e:
        # bcrypt rejects passwords longer than 72 bytes
        print(f"  [!] Password rejected: {e}")
        return None


def cmd_init_db(args: argparse.Namespace) -> int:
    UserStore(args.db_url).close()
    PortalStore(args.db_url).close()
    print("  Tables created.")
    return 0


def cmd_create_user(args: argparse.Namespace) -> int:
    password = _read_password(args.password)
    if password is None:
        return 1
    hashed = _hash_or_report(password)
    if hashed is None:
        return 1
    store = UserStore(args.db_url)
    try:
        user_id = store.create_user(User(username=args.username, hashed_password=hashed))
    except IntegrityError:
        print(f"  [!] User '{args.username}' already exists.")
        return 1
    finally:
        store.close()
    print(f"  Created user '{args.username}' (id {user_id}).")
    return 0


def cmd_set_password(args: argparse.Namespace) -> int:
    password = _read_password(args.password)
    if password is None:
        return 1
    hashed = _hash_or_report(password)
    if hashed is None:
        return 1
    store = UserStore(args.db_url)
    try:
        updated = store.set_password(args.username, hashed)
    finally:
        store.close()
    if not updated:
        print(f"  [!] No user named '{args.username}'.")
        return 1
    print(f"  Password updated for '{args.username}'.")
    return 0


def cmd_add_state(args: argparse.Namespace) -> int:
    store = PortalStore(args.db_url)
    try:
        state_id = store.create_state(State(state_name=args.name, population=args.population))
    finally:
        store.close()
    print(f"  Added state '{args.name}' (id {state_id}).")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="covid-portal",
        description="Operator tools for the COVID-19 India portal API.",
    )
    parser.add_argument(
        "--db-url",
        metavar="URL",
        default=None,
        help="SQLAlchemy database URL (default: DATABASE_URL setting)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init-db", help="Create the user, state and district tables")
    p.set_defaults(func=cmd_init_db)

    p = sub.add_parser("create-user", help="Provision a login account")
    p.add_argument("username")
    p.add_argument("--password", help="Plaintext password (prompted when omitted)")
    p.set_defaults(func=cmd_create_user)

    p = sub.add_parser("set-password", help="Replace an existing user's password")
    p.add_argument("username")
    p.add_argument("--password", help="Plaintext password (prompted when omitted)")
    p.set_defaults(func=cmd_set_password)

    p = sub.add_parser("add-state", help="Insert a state record")
    p.add_argument("name")
    p.add_argument("population", type=int)
    p.set_defaults(func=cmd_add_state)

    p = sub.add_parser("serve", help="Run the HTTP API with uvicorn")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=3000)
    p.add_argument("--reload", action="store_true")
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
