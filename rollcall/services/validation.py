"""Form validators: each maps a candidate to zero or more field-scoped errors."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from rollcall.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from rollcall.models import User
from rollcall.schemas.users import FieldError, UserForm

DUPLICATE_NAME_MESSAGE = "A user with that name already exists"
EMPTY_ROLES_MESSAGE = "At least one role must be selected"


def validate_user(session: Session, candidate: UserForm) -> list[FieldError]:
    """
    Reject a username already held by a different user.

    The record being edited is excluded by id; a new submission (id None)
    never matches an existing row.
    """
    existing = session.query(User).filter(User.username == candidate.name).first()
    if existing is not None and existing.id != candidate.id:
        return [FieldError(field="name", message=DUPLICATE_NAME_MESSAGE)]
    return []


def validate_roles(role_ids: Sequence[str] | None) -> list[FieldError]:
    """Reject a missing or empty role selection."""
    if not role_ids:
        return [FieldError(field="roles", message=EMPTY_ROLES_MESSAGE)]
    return []


def validate_credentials(candidate: UserForm, require_password: bool = True) -> list[FieldError]:
    """Length checks on username and (when submitted) password."""
    errors: list[FieldError] = []
    name = candidate.name.strip()
    if not (USERNAME_MIN_LEN <= len(name) <= USERNAME_MAX_LEN):
        errors.append(
            FieldError(
                field="name",
                message=f"Username must be {USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} characters",
            )
        )
    if require_password and not (PASSWORD_MIN_LEN <= len(candidate.password) <= PASSWORD_MAX_LEN):
        errors.append(
            FieldError(
                field="password",
                message=f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters",
            )
        )
    return errors
