"""Profile page for any signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.responses import Response

from rollcall.api.auth import get_current_user
from rollcall.api.templating import render
from rollcall.core.database import get_db
from rollcall.schemas.auth import CurrentUser
from rollcall.services.admin import find_by_id

router = APIRouter()


@router.get("")
def profile(
    request: Request,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    user = find_by_id(db, current_user.id)
    return render(request, "profile.html", {"current_user": current_user, "user": user})
