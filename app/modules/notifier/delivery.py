"""Webhook delivery of issue notifications.

Each configured endpoint is posted to independently. A failure on one
endpoint is logged and never stops delivery to the other or bubbles up to
the caller.
"""

from datetime import datetime
from typing import Optional

import requests

from core.config import settings
from core.logging import get_module_logger
from models.issues import Issue, Repository
from models.notifications import DeliveryReport, NotificationReason, NotifierConfig
from modules.notifier.formatter import format_message
from modules.notifier.router import Notify

logger = get_module_logger()

JSON_HEADERS = {"Content-Type": "application/json"}


def post_webhook(url: str, payload: dict, channel: str) -> bool:
    """POST a JSON payload to a webhook URL.

    Returns:
        bool: True if the endpoint answered with a 2xx status.
    """
    try:
        response = requests.post(
            url,
            json=payload,
            headers=JSON_HEADERS,
            timeout=settings.http.TIMEOUT_SECONDS,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error("notification_delivery_failed", channel=channel, error=str(e))
        return False

    logger.info(
        "notification_delivered", channel=channel, status_code=response.status_code
    )
    return True


def send_slack_notification(webhook_url: str, message: str) -> bool:
    payload = {
        "text": message,
        "unfurl_links": False,
    }
    return post_webhook(webhook_url, payload, "slack")


def send_discord_notification(webhook_url: str, message: str) -> bool:
    payload = {
        "content": message,
    }
    return post_webhook(webhook_url, payload, "discord")


def send_notification(
    issue: Issue,
    reason: NotificationReason,
    config: NotifierConfig,
    repository: Repository,
    now: Optional[datetime] = None,
) -> DeliveryReport:
    """Format the message for an issue and post it to every configured endpoint."""
    message = format_message(issue, reason, config, repository, now)
    report = DeliveryReport(issue_number=issue.number, reason=reason)

    logger.info(
        "sending_notification",
        issue_number=issue.number,
        reason=reason.value,
    )

    endpoints = [
        ("slack", config.slack_webhook_url, send_slack_notification),
        ("discord", config.discord_webhook_url, send_discord_notification),
    ]
    for channel, url, sender in endpoints:
        if not url:
            continue
        if sender(url, message):
            report.delivered.append(channel)
        else:
            report.failed.append(channel)

    if report.attempted == 0:
        logger.warning("no_webhooks_configured", issue_number=issue.number)

    return report


def build_notifier(config: NotifierConfig, repository: Repository) -> Notify:
    """Bind the run's config and repository into a notify(issue, reason) callable."""

    def notify(issue: Issue, reason: NotificationReason) -> DeliveryReport:
        return send_notification(issue, reason, config, repository)

    return notify
