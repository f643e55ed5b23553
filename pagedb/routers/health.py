# File: pagedb/routers/health.py | Version: 1.0 | Title: Health & readiness endpoints
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from pagedb.db.session import engine

log = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/healthz")
def healthz() -> dict:
    """
    Liveness probe: returns 200 if the app can serve requests.
    """
    return {"status": "ok"}


@router.get("/readyz")
def readyz():
    """
    Readiness probe: 200 if the datastore answers SELECT 1, else 503.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:  # pragma: no cover
        log.warning("Readiness check failed: %s", e)
        return JSONResponse({"status": "degraded", "db": "error"}, status_code=503)
    return {"status": "ok", "db": "ok"}
