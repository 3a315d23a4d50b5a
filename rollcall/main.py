"""FastAPI application entrypoint. No business logic; only wiring, startup seeding and error pages."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.responses import Response

from rollcall.api import router as api_router
from rollcall.api.templating import render
from rollcall.core.config import settings
from rollcall.core.database import SessionLocal, engine
from rollcall.models import Base
from rollcall.services.admin import NotFoundError
from rollcall.services.bootstrap import ensure_admin, seed_roles

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Seed the role set and the optional initial admin before serving requests."""
    # PostgreSQL schemas are managed by Alembic; SQLite (local runs) is created in place.
    if engine.url.get_backend_name() == "sqlite":
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_roles(db, [*settings.SEED_ROLES, settings.DEFAULT_ROLE, settings.ADMIN_ROLE])
        if settings.INITIAL_ADMIN_USERNAME and settings.INITIAL_ADMIN_PASSWORD:
            ensure_admin(
                db,
                settings.INITIAL_ADMIN_USERNAME,
                settings.INITIAL_ADMIN_PASSWORD.get_secret_value(),
                settings.ADMIN_ROLE,
            )
    finally:
        db.close()
    logger.info("Rollcall started: env=%s", settings.APP_ENV)
    yield


app = FastAPI(
    title="Rollcall",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> Response:
    """Render the generic error page for lookups that found nothing."""
    return render(
        request,
        "error.html",
        {"message": exc.message},
        status_code=status.HTTP_404_NOT_FOUND,
    )


@app.get("/")
def root() -> Response:
    """Send visitors to the login page."""
    return RedirectResponse("/auth/login", status_code=status.HTTP_303_SEE_OTHER)
