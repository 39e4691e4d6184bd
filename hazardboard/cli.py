"""HazardBoard CLI: initialize the database, manage administrators."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys


async def cmd_init_db(args):
    """Create tables and seed the default administrator."""
    from hazardboard.config import get_settings
    from hazardboard.db.engine import async_session_factory, create_tables, engine
    from hazardboard.services.auth import ensure_default_admin

    settings = get_settings()
    await create_tables()
    if settings.seed_default_admin:
        async with async_session_factory() as db:
            admin = await ensure_default_admin(
                db, settings.default_admin_username, settings.default_admin_password,
            )
        print(f"Default administrator: {admin.username} (id={admin.id})")
    await engine.dispose()
    print(f"Database ready: {settings.database_url}")


async def cmd_create_admin(args):
    """Create an administrator account."""
    from hazardboard.db.engine import async_session_factory, create_tables, engine
    from hazardboard.errors import HazardBoardError
    from hazardboard.models import Role
    from hazardboard.services.auth import register_account

    password = args.password
    if not password:
        password = getpass.getpass("Administrator password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    if len(password) < 6:
        print("Password must be at least 6 characters")
        sys.exit(1)

    await create_tables()
    try:
        async with async_session_factory() as db:
            account = await register_account(db, args.username, password, role=Role.administrator)
    except HazardBoardError as e:
        print(f"Could not create administrator: {e.message}")
        sys.exit(1)
    finally:
        await engine.dispose()

    print(f"Administrator created: {account.username} (id={account.id})")


def main():
    from hazardboard.config import get_settings

    logging.basicConfig(level=get_settings().log_level.upper())

    parser = argparse.ArgumentParser(description="HazardBoard CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create tables and seed the default administrator")

    ca = subparsers.add_parser("create-admin", help="Create an administrator account")
    ca.add_argument("--username", required=True, help="Administrator username")
    ca.add_argument("--password", default="", help="Password (prompted if not given)")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-admin":
        asyncio.run(cmd_create_admin(args))


if __name__ == "__main__":
    main()
