"""Startup seeding: the fixed role set and an optional first admin account."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from rollcall.core.security import hash_password
from rollcall.models import Role, User
from rollcall.services.roles import find_role_by_name

logger = logging.getLogger(__name__)


def seed_roles(session: Session, names: Iterable[str]) -> list[Role]:
    """Create any missing roles from names. Idempotent; returns the newly created roles."""
    created: list[Role] = []
    try:
        for name in dict.fromkeys(names):
            if find_role_by_name(session, name) is None:
                role = Role(name=name)
                session.add(role)
                created.append(role)
        session.commit()
    except Exception:
        session.rollback()
        raise
    for role in created:
        logger.info("Seeded role: id=%s name=%s", role.id, role.name)
    return created


def ensure_admin(
    session: Session,
    username: str,
    password: str,
    admin_role: str,
) -> User | None:
    """
    Create username with admin_role unless a user with that name exists.

    Returns the new user, or None when nothing was created.
    """
    try:
        if session.query(User).filter(User.username == username).first() is not None:
            return None
        role = find_role_by_name(session, admin_role)
        if role is None:
            role = Role(name=admin_role)
            session.add(role)
        user = User(username=username, password_hash=hash_password(password))
        session.add(user)
        user.roles = {role}
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.warning("Created initial admin user: username=%s", username)
    return user
