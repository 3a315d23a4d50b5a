"""Health check endpoint with database connectivity and role-store check."""

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rollcall.core.config import settings
from rollcall.core.database import check_db_connected, get_db
from rollcall.models import Role
from rollcall.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status, database connectivity and the number of seeded roles.
    Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            database="disconnected",
        )
    try:
        role_count = db.query(Role).count()
    except SQLAlchemyError:
        role_count = None
    return HealthResponse(
        status="ok" if role_count else "degraded",
        environment=settings.APP_ENV,
        database="connected",
        roles=role_count,
    )
