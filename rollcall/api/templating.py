"""Jinja2 templates shared by the HTML routes."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from rollcall.core.config import get_settings
from rollcall.schemas.users import FieldError

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["admin_role"] = get_settings().ADMIN_ROLE


def errors_by_field(errors: list[FieldError]) -> dict[str, list[str]]:
    """Group validation messages by field name for inline display."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(error.field, []).append(error.message)
    return grouped


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> Response:
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)
