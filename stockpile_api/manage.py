# stockpile_api/manage.py
"""Administrative commands.

Accounts are not self-registered over HTTP; they are created here::

    python -m stockpile_api.manage init-db
    python -m stockpile_api.manage create-user --email a@example.com --name "Ann" --role supervisor
"""
import argparse
import getpass
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from stockpile_api.config import get_settings
from stockpile_api.database import Database, DatabaseError
from stockpile_api.models.users import Role, User
from stockpile_api.schemas.user import UserCreate
from stockpile_api.stores.users import UserStore


def create_user(database: Database, email: str, password: str, name: str, role: Role = Role.WORKER) -> User:
    # Same email rules as the login endpoint, so every created account can log in
    try:
        data = UserCreate(email=email, password=password, name=name, role=role)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValueError(f"Invalid {field}: {error['msg']}") from None

    with database.session() as db:
        users = UserStore(db)
        if users.find_by_email(data.email):
            raise ValueError(f"Email already registered: {data.email}")
        return users.create(email=data.email, password=data.password, name=data.name, role=data.role)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stockpile-manage", description="Stockpile API administration")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing tables")

    user = sub.add_parser("create-user", help="Create a user account")
    user.add_argument("--email", required=True)
    user.add_argument("--name", required=True)
    user.add_argument("--role", choices=[r.value for r in Role], default=Role.WORKER.value)
    user.add_argument("--password", help="Prompted for when omitted")
    return parser


def main(argv: Optional[List[str]] = None, database: Optional[Database] = None) -> int:
    args = build_parser().parse_args(argv)
    load_dotenv()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s [%(name)s] %(message)s")
    if database is None:
        database = Database(get_settings().database_url)

    if args.command == "init-db":
        database.create_all()
        print("Tables created.")
        return 0

    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password must not be empty.", file=sys.stderr)
        return 1
    try:
        user = create_user(database, args.email, password, args.name, Role(args.role))
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except DatabaseError:
        print("Could not create user, see log for details.", file=sys.stderr)
        return 2
    print(f"Created {user.role} {user.email} (id={user.id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
