"""
Create a user (e.g. the first SUPERADMIN). Run from project root:
  python -m accounts.scripts.create_user EMAIL PASSWORD NAME [role]
Example:
  python -m accounts.scripts.create_user root@example.com your-secure-password "Site Owner" SUPERADMIN
"""
import argparse
import sys

from accounts.core.database import SessionLocal
from accounts.models.user import Role
from accounts.services import user_store
from accounts.services.user_store import DuplicateKeyError, RecordValidationError


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an account without going through signup.")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Password (at least 6 characters)")
    parser.add_argument("name", help="Display name (3-50 characters)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        if user_store.find_by_email(db, args.email) is not None:
            print(f"User '{args.email}' already exists.", file=sys.stderr)
            return 1
        user = user_store.create_user(
            db,
            {"email": args.email, "password": args.password, "name": args.name, "role": args.role},
        )
        print(f"Created user '{user.email}' with role '{user.role}' (id {user.id}).")
        return 0
    except RecordValidationError as e:
        for err in e.errors:
            print(f"{err['field']}: {err['message']}", file=sys.stderr)
        return 1
    except DuplicateKeyError:
        print(f"User '{args.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
