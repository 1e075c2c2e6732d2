"""
Health check endpoints
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from clipshare.api.deps import get_catalog, get_session_factory
from clipshare.services.catalog import VideoCatalog

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health_check():
    return {"status": "healthy", "service": "clipshare"}


@router.get("/detailed")
def detailed_health(session_factory: sessionmaker = Depends(get_session_factory),
                    catalog: VideoCatalog = Depends(get_catalog)):
    db = session_factory()
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        logger.warning(f"Database health check failed: {e}")
        database = "unreachable"
    finally:
        db.close()

    healthy = database == "connected"
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "database": database,
            "catalog_size": len(catalog),
        },
    )
