"""
Create a user with one or more roles (e.g. first admin). Run from project root:
  python -m rollcall.scripts.create_user USERNAME PASSWORD [ROLE ...]
Example:
  python -m rollcall.scripts.create_user admin your-secure-password ROLE_ADMIN ROLE_USER
"""
import argparse
import logging
import sys

from rollcall.core.config import get_settings
from rollcall.core.database import SessionLocal
from rollcall.core.security import hash_password
from rollcall.models import User
from rollcall.schemas.users import UserForm
from rollcall.services.admin import create_user
from rollcall.services.bootstrap import seed_roles
from rollcall.services.roles import find_role_by_name
from rollcall.services.validation import validate_credentials, validate_user


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")

    parser = argparse.ArgumentParser(description="Create a Rollcall user with the given roles.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "roles",
        nargs="*",
        help=f"Role names (default: {settings.DEFAULT_ROLE})",
    )
    args = parser.parse_args(argv)

    form = UserForm(name=args.username.strip(), password=args.password)
    role_names = args.roles or [settings.DEFAULT_ROLE]

    db = SessionLocal()
    try:
        errors = validate_credentials(form) or validate_user(db, form)
        if errors:
            for error in errors:
                print(f"{error.field}: {error.message}", file=sys.stderr)
            return 1
        seed_roles(db, [*settings.SEED_ROLES, settings.DEFAULT_ROLE, settings.ADMIN_ROLE])
        role_ids = []
        for name in role_names:
            role = find_role_by_name(db, name)
            if role is None:
                print(f"Unknown role '{name}'.", file=sys.stderr)
                return 1
            role_ids.append(str(role.id))
        user = User(username=form.name, password_hash=hash_password(form.password))
        create_user(db, user, role_ids)
        print(f"Created user '{form.name}' with roles {', '.join(user.role_names)}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
