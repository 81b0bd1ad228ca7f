from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from pillar.api.cloud.http import HTTPCloudClient
from pillar.api.context import new_id
from pillar.api.log import setup_logging
from pillar.api.settings import PillarSettings, get_settings

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings: PillarSettings = _app.state.settings or get_settings()
    setup_logging(settings.effective_log_level())

    if not settings.cloud_url:
        msg = "a hostname and port number where a cloud provisioner endpoint can be found are required"
        raise RuntimeError(msg)

    instance = new_id()
    logger.info(
        "Pillar starting (instance={}, host={}, port={}, dev={})",
        instance,
        settings.host,
        settings.port,
        settings.dev,
    )

    _app.state.cloud_client = HTTPCloudClient(settings.cloud_url, timeout=settings.cloud_timeout)
    logger.info("Provisioner: {} (timeout={}s)", settings.cloud_url, settings.cloud_timeout)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("Pillar shutting down")
    _app.state.cloud_client.close()
    _app.state.cloud_client = None


# ---------------------------------------------------------------------------
# Middleware and error rendering
# ---------------------------------------------------------------------------


async def _request_headers(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag the request with an ID and set the default response headers."""
    request_id = new_id()
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    if not request.url.path.startswith(API_PREFIX):
        # Anti-clickjacking: never render inside a foreign iframe.
        response.headers["X-Frame-Options"] = "SAMEORIGIN"
        response.headers["Content-Security-Policy"] = "frame-ancestors 'self'"
        return response

    response.headers["Content-Type"] = "application/json"
    if request.method == "GET":
        response.headers["Expires"] = "0"
    return response


async def _http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


async def _validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse({"message": str(exc)}, status_code=status.HTTP_400_BAD_REQUEST)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(settings: PillarSettings | None = None) -> FastAPI:
    """Build the application.

    ``settings`` overrides the environment (used by the CLI); when omitted the
    lifespan reads :func:`get_settings`.
    """
    app = FastAPI(title="Pillar", lifespan=lifespan)
    app.state.settings = settings
    app.state.cloud_client = None

    app.middleware("http")(_request_headers)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    from pillar.api.routers.static import router as static_router
    from pillar.api.routers.workspaces import router as workspaces_router

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(workspaces_router)

    app.include_router(api)
    app.include_router(static_router)
    return app


app = create_app()
