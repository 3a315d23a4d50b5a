"""Pydantic request/response schemas."""

from rollcall.schemas.auth import CurrentUser, LoginRequest
from rollcall.schemas.health import HealthResponse
from rollcall.schemas.users import (
    FieldError,
    RoleItem,
    UserForm,
    UserListItem,
    UsersListResponse,
)

__all__ = [
    "CurrentUser",
    "FieldError",
    "HealthResponse",
    "LoginRequest",
    "RoleItem",
    "UserForm",
    "UserListItem",
    "UsersListResponse",
]
