"""
Slack webhook notification sender.

Sends plain-text alerts to a Slack channel via incoming webhooks,
used when a scrape comes back empty or loses categories.
"""

from __future__ import annotations

import logging

import httpx

from core.config import settings

logger = logging.getLogger(__name__)


async def send_slack_alert(
    text: str,
    *,
    blocks: list[dict] | None = None,
    webhook_url: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> bool:
    """
    Send a message to the configured Slack webhook.

    Args:
        text: Fallback text for notifications.
        blocks: Optional Slack Block Kit blocks for rich formatting.
        webhook_url: Overrides settings.slack_webhook_url.
        transport: Optional httpx transport (tests).

    Returns:
        True if sent successfully, False otherwise.
    """
    url = webhook_url if webhook_url is not None else settings.slack_webhook_url
    if not url:
        logger.warning("SLACK_WEBHOOK_URL not configured. Alert skipped.")
        return False

    payload: dict = {"text": text}
    if blocks:
        payload["blocks"] = blocks

    try:
        async with httpx.AsyncClient(timeout=10.0, transport=transport) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            logger.info("Slack alert sent successfully.")
            return True
    except httpx.HTTPError as exc:
        logger.error("Failed to send Slack alert: %s", exc)
        return False
