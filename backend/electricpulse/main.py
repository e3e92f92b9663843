"""
ElectricPulse API: application entry point
Meter reading analytics: telemetry, alerts, forecasts and billing reports.
"""
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from electricpulse.core.config import settings
from electricpulse.core.logging import configure_logging, get_logger
from electricpulse.api.v1.router import router as api_router
from electricpulse.middleware.rate_limit import limiter
from electricpulse.middleware.request_id import RequestIDMiddleware

configure_logging(debug=settings.APP_DEBUG)
log = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("electricpulse_startup", version=VERSION, env=settings.APP_ENV)
    yield
    log.info("electricpulse_shutdown")


app = FastAPI(
    title="ElectricPulse API",
    description="Advanced Meter Reading Analytics Platform",
    version=VERSION,
    docs_url="/api/docs" if settings.APP_ENV != "production" else None,
    redoc_url="/api/redoc" if settings.APP_ENV != "production" else None,
    lifespan=lifespan,
)

# ── Rate limiting ──────────────────────────────────────────────────────────
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ── CORS ───────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Request tracing ────────────────────────────────────────────────────────
app.add_middleware(RequestIDMiddleware)


@app.middleware("http")
async def request_timing(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = time.time() - start
    response.headers["X-Response-Time"] = f"{duration:.4f}s"
    return response


# ── Centralized exception handler ──────────────────────────────────────────
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    log.error("unhandled_exception", path=request.url.path, error=str(exc), exc_type=type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# ── Health check ───────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
def health():
    return {"status": "healthy", "app": settings.APP_NAME, "version": VERSION}


# ── Prometheus metrics ─────────────────────────────────────────────────────
Instrumentator().instrument(app).expose(app, endpoint="/metrics")


# ── Routes ─────────────────────────────────────────────────────────────────
app.include_router(api_router)
