"""Scrape the device list page and replace the JSON snapshot."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from workers.device_list.fetcher import FetchError
from workers.device_list.models import RefreshStatus, RefreshSummary
from workers.device_list.orchestrator import refresh_devices

logging.basicConfig(level=logging.INFO, format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s")
logger = logging.getLogger("scrape_devices")


def print_summary(summary: RefreshSummary) -> None:
    print(f"\nScraped {summary.total} devices")
    print("\nSummary by category:")
    for category, count in sorted(summary.category_counts.items(), key=lambda item: (-item[1], item[0])):
        print(f"  {category}: {count} devices")

    if summary.missing_categories:
        print("\nKnown categories not found on the page:")
        for category in summary.missing_categories:
            print(f"  {category}")

    print(f"\nSaved to: {summary.snapshot_path}")


async def async_main(url: str, output: str, notify: bool) -> int:
    print("🚀 Scraping device list...")
    try:
        summary = await refresh_devices(url=url, snapshot_path=output, notify=notify)
    except FetchError as exc:
        logger.error("Error scraping device list: %s", exc)
        return 1

    if summary.status == RefreshStatus.EMPTY:
        logger.warning("No devices found in the HTML. The page structure may have changed.")
        return 1

    print_summary(summary)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Scrape the device list page into a JSON snapshot")
    parser.add_argument("--url", type=str, default=settings.device_list_url, help="Device list page URL")
    parser.add_argument("--output", type=str, default=settings.snapshot_path, help="Snapshot JSON path")
    parser.add_argument("--no-notify", action="store_true", help="Do not send Slack alerts")
    args = parser.parse_args()

    sys.exit(asyncio.run(async_main(args.url, args.output, not args.no_notify)))
