from fastapi import APIRouter
from fastapi.responses import JSONResponse

from jailbox.api.deps import ScriptHostDep
from jailbox.core.health import liveness_check, readiness_check

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/liveness/", response_model=None)
async def liveness() -> bool | JSONResponse:
    """
    Liveness probe: is the process alive and responsive?

    Lightweight: no filesystem I/O.
    """
    ok, failures = liveness_check()
    if not ok:
        return JSONResponse(
            status_code=503,
            content={"success": False, "message": "Process unhealthy", "data": failures},
        )
    return True


@router.get("/health-check/", response_model=None)
def health_check(host: ScriptHostDep) -> bool | JSONResponse:
    """
    Readiness probe: can the service handle traffic?

    Checks: context directory exists and the script compiles.
    Returns 200 with true if all checks pass; 503 otherwise.
    """
    ok, failures = readiness_check(host)
    if not ok:
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Service Unavailable",
                "data": failures,
            },
        )
    return True
