"""
Main FastAPI application entry point.
"""
import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from .config import settings
from .database import engine, init_db
from .domain.common.errors import PersistenceError
from .infra.db.seed import seed_reference_data
from .logging_config import configure_logging
from .wiring.bootstrap import create_uow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    configure_logging(settings.log_level)
    logger.info("Starting SkillSwap API...")
    logger.info("Database: %s", engine.url.render_as_string(hide_password=True))
    logger.info("CORS origins: %s", settings.cors_origins_list)

    if settings.create_tables_on_startup:
        await init_db()

    if settings.seed_on_startup:
        async with create_uow() as uow:
            await seed_reference_data(uow)

    yield

    # Shutdown
    logger.info("Shutting down SkillSwap API...")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="SkillSwap API",
    description="Skill exchange platform: skill catalogue, users and roles",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_cancelled_requests(request: Request, call_next):
    """Log client disconnects / shutdown cancellation, then let it propagate."""
    try:
        return await call_next(request)
    except asyncio.CancelledError:
        logger.info("Request cancelled: %s %s", request.method, request.url.path)
        raise


def _error_body(detail: str) -> dict:
    return {
        "detail": detail,
        "trace_id": uuid.uuid4().hex,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    body = _error_body("An error occurred while processing your request.")
    logger.error(
        "Persistence failure on %s %s (trace_id=%s)",
        request.method,
        request.url.path,
        body["trace_id"],
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=body)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "SkillSwap API",
        "version": "0.1.0",
        "docs": "/docs",
        "status": "running",
    }


@app.get("/livez")
async def liveness():
    """Liveness probe - zero dependencies, confirms process is responsive."""
    return {"status": "ok"}


@app.get("/readyz")
async def readiness():
    """Readiness probe - checks database connectivity."""
    checks = {}
    healthy = True
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        checks["database"] = f"error: {type(e).__name__}"
        healthy = False

    return JSONResponse(
        content={"status": "ok" if healthy else "unhealthy", "checks": checks},
        status_code=200 if healthy else 503,
    )


# Include API routers
from .api.v1.router import router as api_router  # noqa: E402
app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "skillswap.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
