"""Utility script to create the first service desk account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from servicedesk.application.use_cases.users import create_user
from servicedesk.domain.entities import ROLE_SUPER_ADMIN, ROLES
from servicedesk.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial account for the service desk notification API.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name (default: Administrator)")
    parser.add_argument(
        "--email", default="admin@example.com", help="Sign-in email (default: admin@example.com)"
    )
    parser.add_argument(
        "--role",
        default=ROLE_SUPER_ADMIN,
        choices=sorted(ROLES),
        help=f"Account role (default: {ROLE_SUPER_ADMIN})",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("No password provided.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            role=args.role,
            password=password,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
