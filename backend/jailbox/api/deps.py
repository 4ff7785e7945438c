import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from jailbox.core.config import settings
from jailbox.core.scope import ScratchScopeManager
from jailbox.engines.script import ScriptHost

logger = logging.getLogger(__name__)


@lru_cache
def default_script_host() -> ScriptHost:
    """Host built from settings (CONTEXT_DIR, SCRIPT_PATH) on first use."""
    return ScriptHost.from_path(
        settings.script_path,
        settings.CONTEXT_DIR,
        scopes=ScratchScopeManager(settings.SCRATCH_BASE_DIR),
    )


def get_script_host(request: Request) -> ScriptHost:
    host = getattr(request.app.state, "script_host", None)
    if host is not None:
        return host
    try:
        return default_script_host()
    except (OSError, ValueError) as e:
        logger.error("Script host is not available: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Script host is not configured",
        ) from e


ScriptHostDep = Annotated[ScriptHost, Depends(get_script_host)]
