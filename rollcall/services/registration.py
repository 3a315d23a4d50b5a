"""Self-service registration: new users always get exactly the default role."""

import logging

from sqlalchemy.orm import Session

from rollcall.core.config import get_settings
from rollcall.models import User
from rollcall.services.admin import NotFoundError
from rollcall.services.roles import find_role_by_name

logger = logging.getLogger(__name__)


def register_user(session: Session, user: User, default_role: str | None = None) -> User:
    """
    Persist user with the single default role, discarding any roles set on it.

    Raises NotFoundError if the default role has not been seeded.
    """
    role_name = default_role or get_settings().DEFAULT_ROLE
    try:
        role = find_role_by_name(session, role_name)
        if role is None:
            raise NotFoundError(f"Default role {role_name} not found")
        session.add(user)
        user.roles = {role}
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Registered user: id=%s username=%s role=%s", user.id, user.username, role_name)
    return user
