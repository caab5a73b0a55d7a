"""Liveness and database checks."""
import logging
import time
from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sahaya_api.database import get_db

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()

router = APIRouter(prefix="/health", tags=["Health"])


def _ping(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logger.exception("Database ping failed")
        return False


@router.get("")
def health_check(db: Session = Depends(get_db)):
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "database": {
            "status": "connected" if _ping(db) else "disconnected",
            "dialect": db.get_bind().dialect.name,
        },
    }


@router.get("/db")
def database_check(db: Session = Depends(get_db)):
    if not _ping(db):
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Database connection failed"},
        )
    return {"status": "ok", "message": "Database connection is healthy"}
