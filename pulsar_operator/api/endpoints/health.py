from __future__ import annotations

from fastapi import APIRouter
from starlette.responses import JSONResponse

from pulsar_operator.core.observability.metrics import inc_named
from pulsar_operator.core.resources.decode import references_connection, supported_kinds

router = APIRouter()


# ------------------------------------------------------------
# Unversioned health (kubelet probes)
# ------------------------------------------------------------
@router.get("/health/live")
async def live():
    inc_named("health_live")
    return {"status": "ok"}


@router.get("/health/ready")
async def ready():
    return readiness()


# ------------------------------------------------------------
# Versioned health
# ------------------------------------------------------------
@router.get("/api/v1/health/live")
def liveness():
    inc_named("health_live")
    return {"status": "alive"}


@router.get("/api/v1/health/ready")
def readiness():
    """
    Ready once at least one dependent kind is registered with the mapper.
    """
    inc_named("health_ready")

    problems: list[str] = []
    if not any(references_connection(k) for k in supported_kinds()):
        problems.append("no_dependent_kinds_registered")

    if problems:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "problems": problems},
        )

    return {"status": "ready"}
