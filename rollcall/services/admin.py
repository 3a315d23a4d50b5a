"""Admin operations on user accounts: list, lookup, create, update, remove."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from rollcall.models import User
from rollcall.services.roles import resolve_roles

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when a user lookup by id or username finds nothing."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def list_users(session: Session) -> list[User]:
    """All users ordered by id, roles loaded."""
    return session.query(User).order_by(User.id).all()


def find_by_username(session: Session, name: str) -> User:
    user = session.query(User).filter(User.username == name).first()
    if user is None:
        logger.warning("User lookup failed: username=%s", name)
        raise NotFoundError(f"User {name} not found")
    return user


def find_by_id(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        logger.warning("User lookup failed: id=%s", user_id)
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def create_user(session: Session, user: User, role_ids: Sequence[str] | None) -> User:
    """
    Persist a new user with the roles resolved from role_ids.

    user.password_hash is stored as given; hashing belongs to the caller
    (see rollcall.core.security.hash_password).
    """
    try:
        session.add(user)
        user.roles = resolve_roles(session, role_ids)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info(
        "Created user: id=%s username=%s roles=%s",
        user.id,
        user.username,
        user.role_names,
    )
    return user


def _stored_password_hash(session: Session, user_id: int | None) -> str:
    # Read the column from the database, not the identity map: the submitted
    # object may be the persistent instance itself with its password blanked.
    with session.no_autoflush:
        stored = (
            session.query(User.password_hash).filter(User.id == user_id).scalar()
        )
    if stored is None:
        logger.warning("User lookup failed: id=%s", user_id)
        raise NotFoundError(f"User with id {user_id} not found")
    return stored


def update_user(session: Session, user: User, role_ids: Sequence[str] | None) -> User:
    """
    Overwrite the stored user identified by user.id and replace its role set.

    The password is never changed here: the prior stored hash is copied onto
    the submitted user before it is merged, so an edit form without a
    password field cannot wipe it. Raises NotFoundError if user.id is unknown.
    """
    try:
        user.password_hash = _stored_password_hash(session, user.id)
        merged = session.merge(user)
        merged.roles = resolve_roles(session, role_ids)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info(
        "Updated user: id=%s username=%s roles=%s",
        merged.id,
        merged.username,
        merged.role_names,
    )
    return merged


def remove_user(session: Session, user_id: int) -> None:
    """Delete the user with user_id; its role associations go with it. Raises NotFoundError."""
    try:
        user = find_by_id(session, user_id)
        username = user.username
        session.delete(user)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Removed user: id=%s username=%s", user_id, username)
