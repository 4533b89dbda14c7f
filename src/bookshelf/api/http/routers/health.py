"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse

from bookshelf.api.http.app_data import ApplicationDependencies
from bookshelf.api.http.deps import get_app_config, get_app_dependencies
from bookshelf.runtime.config.config_data import ConfigData

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "bookshelf"}


@router.get("/ready", response_model=None)
async def readiness(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
    config: ConfigData = Depends(get_app_config),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the database does not answer."""
    db_healthy = await run_in_threadpool(app_deps.database_service.health_check)

    response = {
        "status": "ready" if db_healthy else "not_ready",
        "environment": config.app.environment,
        "checks": {
            "database": {
                "status": "healthy" if db_healthy else "unhealthy",
                "type": config.database.backend,
            }
        },
    }

    if not db_healthy:
        return JSONResponse(status_code=503, content=response)
    return response
