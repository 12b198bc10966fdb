"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin 'S3cure!pass' admin

Goes through the signup workflow, so username length, uniqueness and the password
policy apply exactly as for POST /signup.
"""
import argparse
import logging
import sys

from app.core.config import get_settings
from app.core.database import SessionLocal
from app.core.security import BcryptHashingService
from app.models.user import UserRole
from app.services.registration import USERNAME_MAX_LEN, USERNAME_MIN_LEN, register_user
from app.services.results import WorkflowError
from app.services.user_store import SqlAlchemyUserStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Fylora user account.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help="Password (must satisfy the password policy)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    role = UserRole(args.role)
    hashing = BcryptHashingService(rounds=get_settings().BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        result = register_user(
            {"username": args.username.strip(), "password": args.password},
            SqlAlchemyUserStore(db),
            hashing,
            role=role,
        )
    finally:
        db.close()

    if isinstance(result, WorkflowError):
        print(result.message, file=sys.stderr)
        return 1
    print(f"Created user '{args.username.strip()}' with role '{role.value}'.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
