"""Admin area: user list, add/edit/remove users, role assignment."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from starlette.responses import Response

from rollcall.api.auth import require_admin
from rollcall.api.templating import errors_by_field, render
from rollcall.core.database import get_db
from rollcall.core.security import hash_password
from rollcall.models import User
from rollcall.schemas.auth import CurrentUser
from rollcall.schemas.users import (
    FieldError,
    RoleItem,
    UserForm,
    UserListItem,
    UsersListResponse,
)
from rollcall.services import admin as admin_service
from rollcall.services.roles import list_roles
from rollcall.services.validation import validate_credentials, validate_roles, validate_user

router = APIRouter()

AdminUser = Annotated[CurrentUser, Depends(require_admin)]
DbSession = Annotated[Session, Depends(get_db)]


def _redirect_to_list() -> Response:
    return RedirectResponse("/admin/users", status_code=status.HTTP_303_SEE_OTHER)


def _render_form(
    request: Request,
    db: Session,
    admin: CurrentUser,
    form: UserForm,
    errors: list[FieldError] | None = None,
) -> Response:
    """Add form when form.id is None, edit form otherwise; 422 when errors are shown."""
    return render(
        request,
        "user_form.html",
        {
            "current_user": admin,
            "form": form,
            "editing": form.id is not None,
            "roles": list_roles(db),
            "selected": set(form.roles),
            "errors": errors_by_field(errors or []),
        },
        status_code=422 if errors else status.HTTP_200_OK,
    )


@router.get("/user")
def admin_profile(request: Request, admin: AdminUser, db: DbSession) -> Response:
    """Profile page of the signed-in admin."""
    user = admin_service.find_by_id(db, admin.id)
    return render(request, "profile.html", {"current_user": admin, "user": user})


@router.get("/users")
def users_page(request: Request, admin: AdminUser, db: DbSession) -> Response:
    users = admin_service.list_users(db)
    return render(request, "users.html", {"current_user": admin, "users": users})


@router.get("/api/users", response_model=UsersListResponse)
def users_json(_admin: AdminUser, db: DbSession) -> UsersListResponse:
    """List all users with their roles as JSON (admin only)."""
    items = []
    for user in admin_service.list_users(db):
        roles = [
            RoleItem(id=role.id, name=role.name)
            for role in sorted(user.roles, key=lambda role: role.id)
        ]
        items.append(UserListItem(id=user.id, username=user.username, roles=roles))
    return UsersListResponse(users=items)


@router.get("/users/new")
def new_user_page(request: Request, admin: AdminUser, db: DbSession) -> Response:
    return _render_form(request, db, admin, UserForm())


@router.post("/users")
def create_user(
    request: Request,
    admin: AdminUser,
    db: DbSession,
    name: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
    roles: Annotated[list[str] | None, Form()] = None,
) -> Response:
    """
    Validate username, password and role selection, then create the user.
    Re-renders the add form with inline errors on failure.
    """
    form = UserForm(name=name.strip(), password=password, roles=roles or [])
    errors = validate_credentials(form) + validate_user(db, form) + validate_roles(roles)
    if errors:
        return _render_form(request, db, admin, form, errors)
    user = User(username=form.name, password_hash=hash_password(form.password))
    admin_service.create_user(db, user, form.roles)
    return _redirect_to_list()


@router.get("/users/{user_id}/edit")
def edit_user_page(request: Request, user_id: int, admin: AdminUser, db: DbSession) -> Response:
    user = admin_service.find_by_id(db, user_id)
    form = UserForm(
        id=user.id,
        name=user.username,
        roles=[str(role.id) for role in user.roles],
    )
    return _render_form(request, db, admin, form)


@router.post("/users/{user_id}/edit")
def update_user(
    request: Request,
    user_id: int,
    admin: AdminUser,
    db: DbSession,
    name: Annotated[str, Form()] = "",
    roles: Annotated[list[str] | None, Form()] = None,
) -> Response:
    """
    Update username and roles. The edit form carries no password; the stored
    one is kept. The edited user is excluded from the uniqueness check by id.
    """
    admin_service.find_by_id(db, user_id)
    form = UserForm(id=user_id, name=name.strip(), roles=roles or [])
    errors = (
        validate_credentials(form, require_password=False)
        + validate_user(db, form)
        + validate_roles(roles)
    )
    if errors:
        return _render_form(request, db, admin, form, errors)
    admin_service.update_user(db, User(id=user_id, username=form.name), form.roles)
    return _redirect_to_list()


@router.post("/users/{user_id}/delete")
def remove_user(user_id: int, _admin: AdminUser, db: DbSession) -> Response:
    admin_service.remove_user(db, user_id)
    return _redirect_to_list()
