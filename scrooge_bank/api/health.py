"""
Health check endpoint.

Used by load balancers and monitoring to verify the
application is running and can reach its database.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scrooge_bank.logging_config import get_logger
from scrooge_bank.models.base import get_db

router = APIRouter(tags=["Health"])

logger = get_logger("health")


@router.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Return application health status including database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "scrooge-bank",
        "database": db_status,
    }
