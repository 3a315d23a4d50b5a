"""Role lookup and resolution of submitted role identifiers."""

import logging
import re
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.models import Role

logger = logging.getLogger(__name__)

# Plain ASCII decimal only; int() alone also takes "0_1" and non-ASCII digits.
ROLE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
# Largest value a BIGINT/SQLite INTEGER column can hold.
MAX_ROLE_ID = 2**63 - 1


def list_roles(session: Session) -> list[Role]:
    """All roles ordered by id (form checkboxes, edit pages)."""
    return session.query(Role).order_by(Role.id).all()


def find_role_by_name(session: Session, name: str) -> Role | None:
    return session.query(Role).filter(Role.name == name).first()


def _parse_role_id(raw: str) -> int | None:
    """Positive id from a submitted value, or None when it cannot name a role."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not ROLE_ID_PATTERN.fullmatch(text):
        return None
    role_id = int(text)
    if role_id < 1 or role_id > MAX_ROLE_ID:
        return None
    return role_id


def resolve_roles(session: Session, role_ids: Iterable[str] | None) -> set[Role]:
    """
    Map submitted role identifiers to Role rows.

    Identifiers that are not decimal integers, fall outside the stored id
    range, or do not match a role are dropped; duplicates collapse. Never
    raises for bad input, so callers must reject empty submissions beforehand
    (see validate_roles).
    """
    resolved: set[Role] = set()
    for raw in role_ids or ():
        role_id = _parse_role_id(raw)
        if role_id is None:
            logger.debug("Dropping malformed role id %r", raw)
            continue
        try:
            role = session.get(Role, role_id)
        except (OverflowError, SQLAlchemyError) as e:
            logger.debug("Dropping role id %s: lookup failed: %s", role_id, e)
            continue
        if role is None:
            logger.debug("Dropping unknown role id %s", role_id)
            continue
        resolved.add(role)
    return resolved
