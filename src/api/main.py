"""
FastAPI application entry point.

Serves the scraped device snapshot as JSON for the device list UI.

Usage:
    uvicorn api.main:app --app-dir src
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI

from api.middleware import RequestLoggingMiddleware
from api.routes.devices import router as devices_router
from core.config import settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup/shutdown events."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
    )
    yield


app = FastAPI(
    title="Quad Cortex Device List",
    description="Devices available on the Neural DSP Quad Cortex, by category",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# ── Routes ────────────────────────────────────────────────────────────
app.include_router(devices_router)
