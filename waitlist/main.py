import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from waitlist import __version__
from waitlist.api.v1.api import api_router
from waitlist.core.config import Settings, get_settings
from waitlist.core.database import make_session_factory, setup_database
from waitlist.core.exceptions import BaseAppException, MethodError
from waitlist.utils.responses import is_json_request, write_message

logger = logging.getLogger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException):
    headers = {"Allow": exc.allowed} if isinstance(exc, MethodError) else None
    return write_message(exc.status_code, exc.message, not is_json_request(request), headers)


async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Render the router's 405 like any other app error; other HTTP errors keep FastAPI's default."""
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    # Each route accepts a single method, so the router's Allow header names exactly that one
    allowed = (exc.headers or {}).get("Allow", "")
    return await app_exception_handler(request, MethodError(allowed=allowed))


async def index(request: Request):
    """Serve the static signup form."""
    path = Path(request.app.state.index_file)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path, media_type="text/html")

def create_app(database_path: Optional[str] = None, app_settings: Optional[Settings] = None) -> FastAPI:
    """Open the database, make sure the schema exists and build the ASGI app.

    Raises ConnectionError or a SQLAlchemy error when the database can't be
    opened or initialized; the engine is disposed when the app shuts down.
    """
    app_settings = app_settings or get_settings()
    database_path = database_path or app_settings.DATABASE_PATH
    engine = setup_database(database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            engine.dispose()
            logger.debug("database %s closed", database_path)

    app = FastAPI(
        title="Waitlist API",
        description="Collects waitlist signups from a JSON API or a plain HTML form.",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.database_path = database_path
    app.state.index_file = app_settings.INDEX_FILE

    if app_settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.CORS_ORIGINS,
            allow_methods=["GET", "POST"],
            allow_headers=["Content-Type", "Accept"],
        )

    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)
    app.add_api_route("/", index, methods=["GET"], include_in_schema=False)
    app.include_router(api_router, prefix="/api/v1")
    return app
