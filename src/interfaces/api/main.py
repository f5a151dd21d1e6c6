"""
FastAPI application for the LifePush progression engine.

Exposes the daily habit ledger, streak and dashboard read paths.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from tortoise import Tortoise

from src.config import config
from src.core.exceptions import UserNotFoundError
from src.database.config import TORTOISE_ORM
from src.interfaces.api.routers import dashboard, habits

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Tortoise.init(config=TORTOISE_ORM)
    await Tortoise.generate_schemas()
    logger.info("Database initialized")
    yield
    await Tortoise.close_connections()
    logger.info("Database connections closed")


app = FastAPI(
    title="LifePush Progression API",
    description="Daily habit ledger, XP, streaks and mascot evolution",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# AICODE-NOTE: localhost for dev, FRONTEND_URL for production
cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

if config.FRONTEND_URL:
    frontend_url = config.FRONTEND_URL.rstrip("/")
    cors_origins.append(frontend_url)
    logger.info(f"Added frontend URL to CORS origins: {frontend_url}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=r"^https?://localhost:\d+$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    # User deleted between the router lookup and the locked read
    logger.warning(f"{exc} ({request.method} {request.url.path})")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "User not found"},
    )


app.include_router(habits.router)
app.include_router(dashboard.router)


@app.get("/api/health")
async def api_health():
    """API health check endpoint."""
    return {"status": "ok", "service": "lifepush-progression"}
