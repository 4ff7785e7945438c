"""
Script endpoints: GET /collect runs collect(), POST /submit runs check(body).

ScriptHost.invoke is blocking; run it in a thread so the event loop keeps
accepting requests while a script runs.
"""

import asyncio

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import Response

from jailbox.api.deps import ScriptHostDep
from jailbox.core.transport import format_response

router = APIRouter(tags=["script"])


@router.get("/collect", response_class=Response)
async def collect(host: ScriptHostDep) -> Response:
    """Run the script's collect() entry point."""
    outcome = await asyncio.to_thread(host.collect)
    return format_response(outcome, entry="collect")


@router.post("/submit", response_class=Response)
async def submit(request: Request, host: ScriptHostDep) -> Response:
    """Run the script's check() entry point with the raw request body as input."""
    raw = await request.body()
    try:
        user_input = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be valid UTF-8",
        ) from e
    outcome = await asyncio.to_thread(host.check, user_input)
    return format_response(outcome, entry="check")
