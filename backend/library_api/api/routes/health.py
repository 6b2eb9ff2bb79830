"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET / always returns 200 if the process is up (liveness, no storage access)
    - GET /healthz returns 503 {ok: false} if the database is unreachable or the pool
      was never initialized (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer
    - db_manager read through the module at call time: it is assigned in the lifespan,
      after this module is imported
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from library_api import __version__
from library_api.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"ok": True, "service": "library-api", "version": __version__}


@router.get("/healthz")
async def readiness_check():
    """Readiness probe — runs SELECT 1 against the pool."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False},
        )
    return {"ok": True}
