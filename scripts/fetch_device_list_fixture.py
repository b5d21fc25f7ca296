"""Fetch the device list page HTML and save it as a test fixture."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import settings
from workers.device_list.fetcher import FetchError, fetch_device_list_html

logging.basicConfig(level=logging.INFO, format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s")
logger = logging.getLogger("fetch_fixture")


async def async_main(url: str, output: str) -> int:
    try:
        html = await fetch_device_list_html(url)
    except FetchError as exc:
        logger.error("Error fetching fixture: %s", exc)
        return 1

    fixture_path = Path(output)
    fixture_path.parent.mkdir(parents=True, exist_ok=True)
    fixture_path.write_text(html, encoding="utf-8")

    print(f"✅ Saved HTML fixture to {fixture_path}")
    print(f"Size: {len(html.encode('utf-8')):,} bytes")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Save the device list page as a test fixture")
    parser.add_argument("--url", type=str, default=settings.device_list_url, help="Device list page URL")
    parser.add_argument("--output", type=str, default=settings.fixture_path, help="Fixture file path")
    args = parser.parse_args()

    sys.exit(asyncio.run(async_main(args.url, args.output)))
