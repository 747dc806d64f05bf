"""Storefront database management CLI.

Creates and drops the database schema of the storefront domain using the
setup_db/drop_db utilities in `storefront.utils.db`.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py grant-admin <user_id>
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import setup_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    """Drop the database schema for the storefront domain."""
    from storefront.domain import storefront
    from storefront.utils.db import drop_db

    print("Initializing storefront domain...")
    storefront.init()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


def grant_admin(user_id):
    """Flag an existing profile as an admin."""
    from storefront.auth.registration import GrantAdmin
    from storefront.domain import storefront

    storefront.init()
    with storefront.domain_context():
        storefront.process(GrantAdmin(user_id=user_id), asynchronous=False)
    print(f"Granted admin access to {user_id}.")


def main():
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("grant-admin", help="Give a profile back-office access")
    admin_parser.add_argument("user_id", help="Identifier of the profile to promote")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "grant-admin":
        grant_admin(args.user_id)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
