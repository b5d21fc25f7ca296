"""
Device List Refresh: ARQ Job
==============================
Job that:
1. Downloads the device list page (HTTPX)
2. Extracts device records via DeviceTableExtractor
3. Checks category coverage against the schema table
4. Replaces the JSON snapshot (never on an empty result)

An empty extraction almost always means the page markup changed (renamed
classes, retitled headings), so it is reported and the previous snapshot
is kept.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import settings
from core.notifications.slack import send_slack_alert
from workers.device_list.extractors import DeviceTableExtractor
from workers.device_list.fetcher import fetch_device_list_html
from workers.device_list.models import ExtractionResult, RefreshStatus, RefreshSummary
from workers.device_list.schemas import known_categories
from workers.device_list.snapshot import snapshot_cache, write_snapshot

logger = logging.getLogger(__name__)


def find_missing_categories(result: ExtractionResult) -> list[str]:
    """Known categories that contributed no records, in schema order."""
    found = set(result.category_counts())
    return [category for category in known_categories() if category not in found]


async def refresh_devices(
    *,
    url: str | None = None,
    snapshot_path: str | Path | None = None,
    row_selector: str | None = None,
    cell_selector: str | None = None,
    notify: bool = True,
) -> RefreshSummary:
    """
    Fetch, extract and persist the device list.

    FetchError propagates and leaves the snapshot untouched.
    """
    url = url or settings.device_list_url
    snapshot_path = Path(snapshot_path or settings.snapshot_path)

    # 1. Fetch HTML
    html = await fetch_device_list_html(url)

    # 2. Extract
    extractor = DeviceTableExtractor(
        html,
        row_selector=row_selector or settings.device_row_selector,
        cell_selector=cell_selector or settings.device_cell_selector,
    )
    result = extractor.extract_all()

    # 3. Empty result → keep previous snapshot
    if result.is_empty:
        logger.warning(
            "No devices found in %s (%d headings seen). The page structure may have changed.",
            url,
            len(result.categories_seen),
        )
        if notify:
            await send_slack_alert(
                f":warning: Device list scrape found no devices at {url}. "
                "The page structure may have changed; previous snapshot kept."
            )
        return RefreshSummary(
            status=RefreshStatus.EMPTY,
            unsupported_categories=list(result.unsupported_categories),
        )

    # 4. Coverage check
    counts = result.category_counts()
    missing = find_missing_categories(result)
    if missing:
        logger.warning("Known categories missing from page: %s", ", ".join(missing))
    if result.unsupported_categories:
        logger.warning(
            "Unsupported categories skipped: %s",
            ", ".join(result.unsupported_categories),
        )
    if missing and notify:
        await send_slack_alert(
            f":mag: Device list scrape is missing {len(missing)} known "
            f"categories: {', '.join(missing)}"
        )

    # 5. Persist
    written = write_snapshot(result.devices, snapshot_path)
    snapshot_cache.invalidate()
    logger.info(
        "🏁 Device refresh finished: %d devices in %d categories",
        len(result.devices),
        len(counts),
    )

    return RefreshSummary(
        status=RefreshStatus.SUCCESS,
        total=len(result.devices),
        category_counts=counts,
        missing_categories=missing,
        unsupported_categories=list(result.unsupported_categories),
        snapshot_path=str(written),
    )


async def run_device_refresh(ctx: dict) -> dict:
    """
    ARQ job entry point.
    Refreshes the device snapshot from the live page.
    """
    logger.info("🕷️  Device refresh started")
    summary = await refresh_devices()
    return summary.as_dict()
