"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.em_admin.api.router import router as admin_router
from src.em_catalog.api.router import router as catalog_router
from src.em_common.database import engine
from src.em_common.errors import AppError
from src.em_common.response import error_response
from src.em_escrow.api.router import router as escrow_router
from src.em_events.api.router import router as events_router
from src.em_gateway.api.router import router as auth_router
from src.em_gateway.middleware.request_log import RequestLogMiddleware
from src.em_reputation.api.router import router as reputation_router
from src.em_seller.api.router import router as seller_router
from src.em_token.api.router import router as token_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB connection. Shutdown: dispose the pool."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("%s started (custody=%s)", settings.APP_NAME, settings.ESCROW_CUSTODY_ADDRESS)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("[%d] %s %s", exc.code, request.url.path, exc.message)
    resp = error_response(exc.code, exc.message, exc.kind.value)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(seller_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(escrow_router, prefix="/api/v1")
app.include_router(reputation_router, prefix="/api/v1")
app.include_router(token_router, prefix="/api/v1")
app.include_router(events_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
