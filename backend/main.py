"""
Theme Presets — FastAPI application entry point.
Builds the app, registers routes, manages the lifespan.
All preset logic lives in application/.
"""

import os
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.rate_limit import limiter
from api.routes.theme_preset_routes import router as theme_preset_router
from api.schemas import HealthResponse
from config.settings import init_settings
from infrastructure.database import create_db_and_tables
from logging_config import get_logger, request_id_var

# Load environment variables from .env file
load_dotenv()
init_settings()

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: create tables on startup
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Theme preset backend starting, initializing database...")
    create_db_and_tables()
    logger.info("Database ready.")
    yield
    logger.info("Theme preset backend shutting down...")


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Theme Presets API",
    description="Theme preset and settings resolution engine",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGIN", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def bind_request_id(request: Request, call_next):
    """Tag every log line of a request with X-Request-ID (or a fresh id)."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", response_model=HealthResponse, summary="Health check")
def health_check() -> dict:
    return {"status": "ok", "service": "theme-presets-backend"}


app.include_router(theme_preset_router)
