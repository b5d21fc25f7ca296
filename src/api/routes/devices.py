"""Device API: health check and the scraped device list."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from core.config import settings
from workers.device_list.fetcher import FetchError
from workers.device_list.models import DeviceRecord
from workers.device_list.orchestrator import refresh_devices
from workers.device_list.snapshot import SnapshotError, list_categories, snapshot_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["devices"])

# One inline scrape at a time; concurrent cache misses wait for it.
_refresh_lock = asyncio.Lock()


# ── Response schemas ──────────────────────────────────────────────────

class HealthResponse(BaseModel):
    status: str
    timestamp: str


class DevicesResponse(BaseModel):
    devices: list[dict[str, str]]
    categories: list[str]


# ── Endpoints ─────────────────────────────────────────────────────────

@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/devices", response_model=DevicesResponse)
async def list_devices():
    """
    Return every device from the latest snapshot plus the sorted
    unique category names.
    """
    try:
        devices = await run_in_threadpool(snapshot_cache.get, settings.snapshot_path)
        if settings.refresh_on_missing_snapshot and not Path(settings.snapshot_path).exists():
            devices = await _refresh_missing_snapshot()
    except SnapshotError as exc:
        logger.error("Error reading devices: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to load devices", "devices": [], "categories": []},
        )

    return DevicesResponse(
        devices=[device.to_dict() for device in devices],
        categories=list_categories(devices),
    )


async def _refresh_missing_snapshot() -> list[DeviceRecord]:
    """Scrape once when no snapshot exists yet. Failures leave the list empty."""
    async with _refresh_lock:
        try:
            if not Path(settings.snapshot_path).exists():
                logger.info("No device snapshot at %s, scraping inline", settings.snapshot_path)
                await refresh_devices()
            return await run_in_threadpool(snapshot_cache.get, settings.snapshot_path)
        except (FetchError, OSError, SnapshotError) as exc:
            logger.warning("Inline scrape failed: %s", exc)
            return []
