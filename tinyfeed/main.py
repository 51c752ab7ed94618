import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import redis.asyncio as redis
from starlette.exceptions import HTTPException as StarletteHTTPException

from tinyfeed.core.config import settings
from tinyfeed.core.errors import FeedError, InternalError, InvalidInput
from tinyfeed.api.routes.feeds import router as feeds_router
from tinyfeed.api.routes.formats import router as formats_router
from tinyfeed.api.routes.pages import not_found_response, router as pages_router
from tinyfeed.api.routes.health import router as health_router
from tinyfeed.services.feed_store import FeedStore
from tinyfeed.utils.ids import now_ms

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"



def _error_response(exc: FeedError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload(), headers=exc.headers())

def _is_api(request: Request) -> bool:
    return request.url.path.startswith(settings.API_PREFIX.rstrip("/") + "/")

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(FeedError)
    async def feed_error(request: Request, exc: FeedError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        return _error_response(InvalidInput())

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and not _is_api(request):
            return not_found_response()
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Not found" if exc.status_code == 404 else str(exc.detail), "kind": "http"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(InternalError())


def create_app(
    redis_client: Optional[redis.Redis] = None,
    clock: Callable[[], int] = now_ms,
) -> FastAPI:
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = redis_client is None
        app.state.redis = redis_client or redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
        app.state.store = FeedStore(app.state.redis, clock=clock)
        try:
            yield
        finally:
            if owned:
                await app.state.redis.aclose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    register_error_handlers(app)

    prefix = settings.API_PREFIX.rstrip("/")

    # JSON API: create/read are public, everything else needs the write key
    app.include_router(feeds_router, prefix=prefix)

    # Health
    app.include_router(health_router)

    # RSS / JSON Feed must be registered before the /f/{feed_id} page
    app.include_router(formats_router)
    app.include_router(pages_router)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app
