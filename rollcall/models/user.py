"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from rollcall.models.base import Base
from rollcall.models.role import users_roles


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    roles: set of Role rows through users_roles; replaced as a whole on admin update.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    roles = relationship(
        "Role",
        secondary=users_roles,
        back_populates="users",
        collection_class=set,
        lazy="selectin",
    )

    @property
    def role_names(self) -> list[str]:
        """Sorted role names, for display and token claims."""
        return sorted(role.name for role in self.roles)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
