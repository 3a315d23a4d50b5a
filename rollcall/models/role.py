"""ORM model for roles and the user/role association table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from rollcall.models.base import Base

# Many-to-many join owned by User; rows go away with the user, never with the role set.
users_roles = Table(
    "users_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Named permission grouping assignable to users.

    name: e.g. 'ROLE_USER' or 'ROLE_ADMIN'
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)

    users = relationship("User", secondary=users_roles, back_populates="roles")

    def __repr__(self) -> str:
        return f"<Role id={self.id} name={self.name!r}>"
