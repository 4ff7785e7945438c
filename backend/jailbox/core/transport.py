"""
Outcome -> HTTP response.

- Success:  200, application/json, body is the JSON text produced by the script.
- Rejected: 200, text/plain, body is the application's message verbatim.
- Faulted:  500, generic {"detail": "Internal server error"}. The diagnostic is
  logged for operators and never sent to the caller.
"""

import logging

from fastapi.responses import JSONResponse, PlainTextResponse, Response

from jailbox.engines.script import Faulted, Outcome, Rejected, Success

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Internal server error"


def format_response(outcome: Outcome, *, entry: str) -> Response:
    if isinstance(outcome, Success):
        return Response(content=outcome.body, media_type="application/json")
    if isinstance(outcome, Rejected):
        return PlainTextResponse(content=outcome.reason)
    if isinstance(outcome, Faulted):
        logger.error(
            "Entry %s faulted (%s): %s",
            entry,
            outcome.fault,
            outcome.diagnostic,
            extra={"script_entry": entry, "fault": outcome.fault},
        )
        return JSONResponse(status_code=500, content={"detail": GENERIC_FAILURE})
    raise TypeError(f"Not an outcome: {outcome!r}")
