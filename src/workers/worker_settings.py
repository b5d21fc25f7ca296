"""
ARQ Worker Settings: registers the device refresh job.

Usage:
    arq workers.worker_settings.WorkerSettings
"""

from __future__ import annotations

import logging

from arq import cron
from arq.connections import RedisSettings

from core.config import settings

logger = logging.getLogger(__name__)


async def run_device_refresh(ctx: dict) -> dict:
    """ARQ job: Refresh the device list snapshot."""
    from workers.device_list.orchestrator import run_device_refresh as _run
    return await _run(ctx)


async def startup(ctx: dict) -> None:
    """Called on worker startup."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
    )
    logger.info("Device list worker started")


async def shutdown(ctx: dict) -> None:
    """Called on worker shutdown."""
    pass


class WorkerSettings:
    """ARQ worker configuration."""

    functions = [
        run_device_refresh,
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = RedisSettings.from_dsn(settings.redis_url)

    # Cron schedule
    cron_jobs = [
        # Device list: every day at 6 AM
        cron(run_device_refresh, hour={6}, minute={0}),
    ]
