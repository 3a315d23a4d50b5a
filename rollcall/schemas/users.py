"""Schemas for user forms, validation errors and the admin user list."""

from pydantic import BaseModel, ConfigDict, Field


class FieldError(BaseModel):
    """A validation message bound to a named form field."""

    field: str
    message: str


class UserForm(BaseModel):
    """
    A submitted user form.

    id is None for new users and carries the edited user's id on update,
    so uniqueness checks can exclude the record being edited.
    """

    id: int | None = None
    name: str = ""
    password: str = ""
    roles: list[str] = Field(default_factory=list)


class RoleItem(BaseModel):
    """Role as shown in forms and lists."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class UserListItem(BaseModel):
    """User entry for admin list (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    roles: list[RoleItem]


class UsersListResponse(BaseModel):
    """Response for GET /admin/api/users (admin only)."""

    users: list[UserListItem]
