"""Login, logout and self-service registration; auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Form, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.responses import Response

from rollcall.api.templating import errors_by_field, render
from rollcall.core.config import get_settings
from rollcall.core.database import get_db
from rollcall.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    token_user_id,
    verify_password,
)
from rollcall.models import User
from rollcall.schemas.auth import CurrentUser, LoginRequest
from rollcall.schemas.users import UserForm
from rollcall.services.registration import register_user
from rollcall.services.validation import validate_credentials, validate_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: resolve the authenticated identity from the session cookie or a Bearer token.
    Raises 401 if missing, invalid, or the user no longer exists.
    """
    token = request.cookies.get(get_settings().AUTH_COOKIE_NAME)
    if credentials is not None:
        token = credentials.credentials
    if not token:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    user_id = token_user_id(payload)
    if user_id is None:
        raise _unauthorized("Invalid token payload")
    user = db.get(User, user_id)
    if user is None:
        raise _unauthorized("User not found")
    # Roles are read from the store; the token claim is informational.
    return CurrentUser(id=user.id, username=user.username, roles=user.role_names)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated user holding the admin role. Raises 403 otherwise."""
    if not current_user.has_role(get_settings().ADMIN_ROLE):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _login_failed(request: Request, username: str) -> Response:
    return render(
        request,
        "login.html",
        {"error": "Invalid username or password.", "username": username},
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


@router.get("/login")
def login_page(request: Request) -> Response:
    return render(request, "login.html")


@router.post("/login")
def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """
    Authenticate with username and password; on success store a JWT in an HTTP-only cookie
    and redirect admins to the user list, everyone else to their profile.
    """
    settings = get_settings()
    try:
        body = LoginRequest(username=username, password=password)
    except ValidationError:
        return _login_failed(request, username)
    user = db.query(User).filter(User.username == body.username).first()
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Login failed: username=%s", body.username)
        return _login_failed(request, body.username)

    token = create_access_token(sub=user.id, roles=user.role_names)
    target = "/admin/users" if settings.ADMIN_ROLE in user.role_names else "/user"
    response = RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.APP_ENV == "prod",
    )
    logger.info("Login succeeded: id=%s username=%s", user.id, user.username)
    return response


@router.post("/logout")
def logout() -> Response:
    response = RedirectResponse("/auth/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(get_settings().AUTH_COOKIE_NAME)
    return response


@router.get("/registration")
def registration_page(request: Request) -> Response:
    return render(request, "registration.html", {"form": UserForm()})


@router.post("/registration")
def register(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    name: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    """
    Register a new account. Only username and password are bound; the account
    always receives the default role. Redirects to the login page on success.
    """
    form = UserForm(name=name.strip(), password=password)
    errors = validate_credentials(form)
    if not errors:
        errors = validate_user(db, form)
    if errors:
        return render(
            request,
            "registration.html",
            {"form": form, "errors": errors_by_field(errors)},
            status_code=422,
        )
    register_user(db, User(username=form.name, password_hash=hash_password(form.password)))
    return RedirectResponse("/auth/login", status_code=status.HTTP_303_SEE_OTHER)
