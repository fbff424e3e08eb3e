"""Health Probe — process and database connectivity check.

Invariants:
    - GET /api/health returns 200 {status: OK, database: connected} when SELECT 1 succeeds
    - Returns 503 {status: ERROR, database: disconnected} otherwise (never raises)
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(request: Request):
    """Connectivity probe used by load balancers and the dashboard."""
    db_manager = getattr(request.app.state, "db_manager", None)
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "ERROR", "database": "disconnected"},
        )
    return {"status": "OK", "database": "connected"}
