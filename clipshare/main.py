"""
Clipshare - video sharing backend
Main FastAPI application entry point
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from clipshare.api.middleware import UploadSizeLimitMiddleware
from clipshare.api.router import api_router
from clipshare.core.config import Settings, settings as default_settings
from clipshare.core.database import create_db_engine, create_session_factory
from clipshare.core.errors import ClipshareError
from clipshare.services.catalog import VideoCatalog
from clipshare.services.credential_store import CredentialStore
from clipshare.services.uploader import LocalVideoStorage, SqlVideoRepository, VideoUploadService

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.storage.ensure_dirs()
    app.state.catalog.load(app.state.video_repository)
    yield
    app.state.engine.dispose()


async def clipshare_error_handler(request: Request, exc: ClipshareError):
    content = {"message": exc.message}
    if exc.detail:
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid request body.", "error": str(exc)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"message": "An internal server error occurred.", "error": str(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        description="Video sharing backend",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    engine = create_db_engine(settings)
    session_factory = create_session_factory(engine)

    storage = LocalVideoStorage(
        settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        chunk_size=settings.upload_chunk_size,
        staging_dir=settings.upload_staging_dir,
    )

    video_repository = SqlVideoRepository(session_factory)
    catalog = VideoCatalog()

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.storage = storage
    app.state.video_repository = video_repository
    app.state.catalog = catalog
    app.state.upload_service = VideoUploadService(
        storage, video_repository, catalog, max_upload_bytes=settings.max_upload_bytes
    )
    app.state.credential_store = CredentialStore(session_factory, rounds=settings.bcrypt_rounds)

    app.add_middleware(
        UploadSizeLimitMiddleware,
        max_body_bytes=settings.max_upload_bytes + settings.upload_overhead_bytes,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ClipshareError, clipshare_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router)
    app.mount(storage.url_prefix, StaticFiles(directory=storage.root, check_dir=False), name="uploads")

    return app


configure_logging(default_settings.log_level)
app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
