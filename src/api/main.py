"""
FastAPI Application.

Main entry point for the API server.
"""

import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load .env file at startup
load_dotenv()

from fastapi import FastAPI, Request  # noqa: E402
from fastapi.exceptions import RequestValidationError  # noqa: E402
from fastapi.responses import JSONResponse  # noqa: E402
from loguru import logger  # noqa: E402
from starlette.exceptions import HTTPException as StarletteHTTPException  # noqa: E402

from config.settings import get_settings  # noqa: E402


class InterceptHandler(logging.Handler):
    """Intercept standard logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding loguru level
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


settings = get_settings()

# Configure loguru format with default module
logger.configure(extra={"module": "Server"})
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[module]: <14}</cyan> | <level>{message}</level>",
    level=settings.log_level.upper(),
)

# Intercept uvicorn logs
for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uv_logger = logging.getLogger(name)
    uv_logger.handlers = [InterceptHandler()]
    uv_logger.propagate = False

log = logger.bind(module="App")

from src.api.routes import (  # noqa: E402
    health_router,
    matches_router,
    notifications_router,
    preferences_router,
)
from src.channels import TelegramBot, TelegramNotifier  # noqa: E402
from src.connections.postgres import PostgresConnection  # noqa: E402
from src.matching.errors import MatchingError  # noqa: E402
from src.matching.service import build_matching_service  # noqa: E402
from src.middleware import setup_middleware  # noqa: E402
from src.modules.users import IdentityProvider, UserRepository  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build dependencies on startup and release them on shutdown."""
    postgres = PostgresConnection(settings.postgres)
    await postgres.connect()

    bot = TelegramBot(settings.telegram.bot_token)
    notifier = TelegramNotifier(bot, UserRepository(postgres.pool))

    app.state.postgres = postgres
    app.state.identity = IdentityProvider(settings.jwt_secret, settings.jwt_algorithm)
    app.state.matching = build_matching_service(postgres, settings, notifier)
    log.info("Server started")

    yield

    # Shutdown
    await app.state.matching.close(settings.matching.shutdown_grace)
    await postgres.close()
    log.info("Server stopped")


app = FastAPI(
    title="Roommate Match API",
    description="Roommate candidate search, likes and mutual matches",
    version="0.1.0",
    lifespan=lifespan,
)

# Setup middleware
setup_middleware(app, settings)

# Register routes
app.include_router(health_router)
app.include_router(preferences_router)
app.include_router(matches_router)
app.include_router(notifications_router)


# Custom exception handlers for unified error response format
@app.exception_handler(MatchingError)
async def matching_exception_handler(request: Request, exc: MatchingError):
    """Convert matching errors to unified error format."""
    if exc.status_code >= 500:
        log.error(f"{request.method} {request.url.path} failed: {exc.message}")

    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to unified error format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert validation errors to unified error format."""
    errors = exc.errors()
    if errors:
        # Get first error message
        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        msg = first_error.get("msg", "Validation error")
        message = f"{field}: {msg}" if field else msg
    else:
        message = "Validation error"

    return JSONResponse(
        status_code=422,
        content={"success": False, "message": message},
    )
