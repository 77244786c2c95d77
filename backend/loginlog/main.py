import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from loginlog.api.health import router as health_router
from loginlog.api.login_attempts import router as login_attempts_router
from loginlog.core.config import APP_VERSION, settings
from loginlog.core.errors import HTTPError, http_error_handler
from loginlog.core.logging import setup_logging
from loginlog.core.middleware import RequestValidationMiddleware
from loginlog.db.session import async_session_maker, dispose_engine, init_db
from loginlog.services.record_store import LoginAttemptStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown."""
    # Setup structured logging first
    setup_logging()

    # Startup
    if settings.AUTO_CREATE_TABLES:
        await init_db()

    # One store per process, handed to handlers through dependencies
    app.state.record_store = LoginAttemptStore(async_session_maker)
    logger.info(f"{settings.APP_NAME} {APP_VERSION} ready")

    yield

    # Shutdown
    logger.info("Closing database connections")
    await dispose_engine()


def mount_static(app: FastAPI, directory: str | None) -> bool:
    """Serve the capture front end from ``directory`` at "/" if it exists.

    Must run after the API routers are included so /api/* keeps precedence.
    """
    if not directory:
        return False
    path = Path(directory)
    if not path.is_dir():
        logger.warning(f"STATIC_DIR {directory} does not exist, not serving static files")
        return False
    app.mount("/", StaticFiles(directory=path, html=True), name="static")
    return True


app = FastAPI(
    title=settings.APP_NAME,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Register custom exception handlers for standardized error responses
app.add_exception_handler(HTTPError, http_error_handler)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request validation middleware (size limit, request ID)
app.add_middleware(
    RequestValidationMiddleware,
    max_request_size=settings.MAX_REQUEST_SIZE,
)

app.include_router(health_router)
app.include_router(login_attempts_router, prefix="/api")

mount_static(app, settings.STATIC_DIR)
