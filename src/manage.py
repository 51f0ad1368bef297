"""Vairanya database management CLI.

Usage:
    python src/manage.py setup-db                # Create all tables
    python src/manage.py drop-db                 # Drop all tables
    python src/manage.py seed-categories         # Insert the default categories
    python src/manage.py create-admin --username meera --name "Meera" --password ...
"""

import argparse
import getpass
import sys

from shared.utils.logging import configure_logging


def setup_database():
    from shared.utils.db import setup_db

    print("Creating database schema...")
    setup_db()
    print("Done.")


def drop_database():
    from shared.utils.db import drop_db

    print("Dropping database schema...")
    drop_db()
    print("Done.")


def seed_default_categories():
    from catalogue.category.management import seed_categories
    from shared.database import new_session
    from shared.utils.db import setup_db

    setup_db()
    with new_session() as session:
        names = seed_categories(session)
    print(f"Categories: {', '.join(names)}")


def create_admin(username, name, email, password):
    from pydantic import ValidationError as SchemaValidationError

    from identity.api.schemas import BootstrapRequest
    from identity.staff.management import bootstrap_superadmin
    from shared.api import validation_messages
    from shared.database import new_session
    from shared.exceptions import VairanyaError
    from shared.utils.db import setup_db

    setup_db()
    password = password or getpass.getpass("Password: ")
    with new_session() as session:
        try:
            request = BootstrapRequest(username=username, name=name or username, email=email or "", password=password)
            staff = bootstrap_superadmin(session, request.staff_fields())
        except SchemaValidationError as exc:
            for field, messages in validation_messages(exc.errors()).items():
                print(f"Error: {field}: {', '.join(messages)}", file=sys.stderr)
            sys.exit(1)
        except VairanyaError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            sys.exit(1)
    print(f"Created superadmin {staff.username!r}.")


def main():
    parser = argparse.ArgumentParser(description="Vairanya database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-categories", help="Insert the default product categories")

    admin_parser = subparsers.add_parser("create-admin", help="Create the first superadmin account")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--name")
    admin_parser.add_argument("--email")
    admin_parser.add_argument("--password", help="Prompted for when omitted")

    args = parser.parse_args()
    configure_logging(to_files=False)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-categories":
        seed_default_categories()
    elif args.command == "create-admin":
        create_admin(args.username, args.name, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
