# serilovers/main.py
import asyncio
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.router import api_router
from .config import settings
from .database import check_db_health, close_db, create_tables
from .exceptions import SeriLoversError
from .redis_client import redis_client

# ============================================================
# Logging
# ============================================================
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================
# Lifespan
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION} (debug={settings.DEBUG})")
    create_tables()

    # Events are best effort, so a missing Redis must not block startup
    if settings.EVENTS_ENABLED:
        try:
            await redis_client.connect()
        except Exception:
            logger.warning("⚠️ Starting without the event bus; publishes will retry lazily")
    else:
        logger.info("🔕 Domain events disabled")

    yield

    logger.info(f"🛑 Shutting down {settings.APP_NAME}")
    await redis_client.disconnect()
    close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Series catalogue, watch progress, ratings and watchlists",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ============================================================
# Middleware
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def trace_requests(request: Request, call_next: Callable):
    """Tag each request with an id and log method, path, status and timing"""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id
    started = time.perf_counter()

    response = await call_next(request)

    elapsed = time.perf_counter() - started
    logger.info(f"{request.method} {request.url.path} [{response.status_code}] {elapsed:.3f}s id={request_id}")
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Process-Time"] = f"{elapsed:.4f}"
    return response


app.include_router(api_router, prefix="/api/v1")

# ============================================================
# Root & Health
# ============================================================

def _app_info() -> dict:
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "timestamp": time.time()}


@app.get("/", tags=["Root"])
async def root() -> dict:
    return {**_app_info(), "status": "running", "health": "/health"}


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """Liveness only; dependencies are not touched"""
    return {**_app_info(), "status": "healthy"}


@app.get("/health/detailed", tags=["Health"])
async def health_check_detailed() -> dict:
    """Database and event-bus connectivity"""
    components = {
        "database": "connected" if await asyncio.to_thread(check_db_health) else "disconnected",
    }
    if settings.EVENTS_ENABLED:
        components["redis"] = "connected" if await redis_client.ping() else "disconnected"
    else:
        components["redis"] = "disabled"

    degraded = "disconnected" in components.values()
    return {**_app_info(), "status": "degraded" if degraded else "healthy", **components}

# ============================================================
# Exception Handlers
# ============================================================

def _error_response(request: Request, status_code: int, detail: str) -> JSONResponse:
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(status_code=status_code, content={"detail": detail, "request_id": request_id})


@app.exception_handler(SeriLoversError)
async def domain_exception_handler(request: Request, exc: SeriLoversError):
    logger.warning(f"⚠️ {exc.__class__.__name__} on {request.url.path}: {exc.message} {exc.context}")
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return _error_response(request, 500, str(exc) if settings.DEBUG else "Internal server error")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "serilovers.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
