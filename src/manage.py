"""Bookstore management CLI.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py create-admin --username admin --email admin@example.com --password s3cret
"""

import argparse
import sys


def _initialized_domain():
    from bookstore.domain import bookstore

    print("Initializing bookstore domain...")
    bookstore.init()
    return bookstore


def setup_database():
    """Create the database schema."""
    from bookstore.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    """Drop the database schema."""
    from bookstore.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping database schema...")
    drop_db(domain)
    print("Done.")


def create_admin(username, email, password):
    """Create an administrator account."""
    from bookstore.errors import BookstoreError
    from bookstore.identity.credentials import hash_password
    from bookstore.identity.registration import CreateUser
    from bookstore.identity.user import Role

    domain = _initialized_domain()
    with domain.domain_context():
        command = CreateUser(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=Role.ADMIN.value,
        )
        try:
            user_id = domain.process(command, asynchronous=False)
        except BookstoreError as exc:
            print(f"Could not create admin: {exc.message}")
            sys.exit(1)

    print(f"Admin {username} created with id {user_id}.")


def main():
    parser = argparse.ArgumentParser(description="Bookstore management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("--username", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "create-admin":
        create_admin(args.username, args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
