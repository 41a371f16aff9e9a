"""Main FastAPI application with the Socket.IO server mounted alongside."""
from contextlib import asynccontextmanager

import socketio
from fastapi import FastAPI, HTTPException, Request, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.orm import Session
from sqlalchemy import text

from poker.api.router import api_router
from poker.api.deps import get_db
from poker.core.config import settings
from poker.core.exceptions import describe_validation_errors
from poker.core.rate_limit import limiter
from poker.core.logging_config import setup_logging, get_logger
from poker.db.session import init_db
from poker.middleware import LoggingMiddleware
from poker.realtime.server import create_realtime

setup_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = get_logger(__name__)

logger.info(
    "application_starting",
    app_title=settings.APP_TITLE,
    app_version=settings.APP_VERSION,
    environment=settings.ENVIRONMENT,
)

# One realtime server (and one live-connection table) per process
realtime = create_realtime(settings)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("database_ready")
    yield
    logger.info("application_stopping", live_connections=realtime.sessions.connection_count)


app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.state.realtime = realtime

app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed body fields are a plain 400, not FastAPI's 422."""
    return JSONResponse(status_code=400, content={"detail": describe_validation_errors(exc.errors())})


# Must be added before other middleware for proper request tracking
app.add_middleware(LoggingMiddleware)


@app.middleware("http")
async def add_api_version_header(request: Request, call_next):
    """Add X-API-Version header to all responses for version tracking."""
    response = await call_next(request)
    response.headers["X-API-Version"] = settings.APP_VERSION
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
        - status: "healthy" or "unhealthy"
        - environment: Current environment setting
        - database: Database connection status
        - realtime: Number of live room connections

    Returns 503 if database is unreachable.
    """
    health_status = {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "database": {"status": "connected"},
        "realtime": {"connections": request.app.state.realtime.sessions.connection_count},
    }

    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        health_status["status"] = "unhealthy"
        health_status["database"]["status"] = f"error: {str(e)}"
        logger.error("health_check_failed", error=str(e))
        raise HTTPException(status_code=503, detail=health_status)

    return health_status


# ASGI entry point: Socket.IO traffic under /socket.io, everything else to FastAPI
asgi_app = socketio.ASGIApp(realtime.sio, other_asgi_app=app, socketio_path=settings.SOCKETIO_PATH)
