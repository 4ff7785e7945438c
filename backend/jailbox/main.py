import logging
from pathlib import Path

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from jailbox.api.main import api_router
from jailbox.core.config import settings
from jailbox.core.transport import GENERIC_FAILURE
from jailbox.engines.script import ScriptHost

_logger = logging.getLogger(__name__)


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)


def create_app(
    script_host: ScriptHost | None = None,
    static_dir: str | Path | None = None,
) -> FastAPI:
    """
    Build the HTTP app. With no script_host, one is built from settings on the
    first request (see jailbox.api.deps.default_script_host).

    static_dir (default settings.STATIC_DIR) is served at / behind the API
    routes when it exists; directories serve their index.html.
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.script_host = script_host

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Catch-all for unhandled exceptions: log and return 500 with safe message."""
        _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": GENERIC_FAILURE},
        )

    # Set all CORS enabled origins
    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(api_router, prefix=settings.API_V1_STR)

    # Web UI fallback LAST so /api routes win.
    ui_dir = static_dir if static_dir is not None else settings.STATIC_DIR
    if ui_dir is not None:
        if Path(ui_dir).is_dir():
            app.mount("/", StaticFiles(directory=ui_dir, html=True), name="static")
        else:
            _logger.info("Static directory %s not found, web UI disabled", ui_dir)
    return app


app = create_app()
