"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from src.meredith.api.http.deps import get_database_service
from src.meredith.core.services import DbSessionService
from src.meredith.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness check: 200 as long as the process is running."""
    return {"status": "healthy", "service": "meredith"}


@router.get("/ready", response_model=None)
def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness check: 503 when the database is unreachable."""
    config = get_config()
    db_healthy = database_service.health_check()

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": "sqlite" if config.database.is_sqlite else "postgresql",
                "pool": database_service.get_pool_status(),
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
