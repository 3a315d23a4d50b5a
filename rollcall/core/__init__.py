"""Core app configuration and database."""

from rollcall.core.config import get_settings, settings
from rollcall.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
