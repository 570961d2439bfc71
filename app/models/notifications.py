"""Notifier configuration and delivery models.

NotifierConfig is built once per run from the raw action inputs and is
frozen afterwards, so every decision made during the run sees the same
values.
"""

import re
from enum import Enum
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REACTION_THRESHOLD = 5
DEFAULT_COMMENT_THRESHOLD = 3
DEFAULT_MAX_ISSUES_TO_CHECK = 100
DEFAULT_ISSUE_STATE = "open"
ISSUE_STATES = ("open", "closed", "all")

DEFAULT_MESSAGE_TEMPLATE = (
    "*{title}*\n"
    "{url}\n"
    "Opened by {author} {created_ago} | {reactions} reactions | {comments} comments"
)
DEFAULT_NEW_ISSUE_PREFIX = ":new: New issue in {repo_link}"
DEFAULT_THRESHOLD_PREFIX = ":fire: Issue is gaining traction in {repo_link}"


class NotificationReason(str, Enum):
    """Why a notification is being sent."""

    CREATED = "created"
    THRESHOLD_REACHED = "threshold_reached"


def split_list(value: str) -> Tuple[str, ...]:
    """Split a comma separated input, dropping blank entries."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_flag(value: str) -> bool:
    """Only the literal string "true" enables a flag."""
    return value.strip() == "true"


_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_int(value: str, default: int, minimum: int = 0) -> int:
    """Parse the leading integer of an input ("10abc" is 10).

    Falls back to the default when no digits lead the value or the result is
    below the minimum.
    """
    match = _LEADING_INT.match(value.strip())
    if match is None:
        return default
    parsed = int(match.group(0))
    if parsed < minimum:
        return default
    return parsed


class NotifierConfig(BaseModel):
    """Immutable notifier configuration for a single run.

    Attributes:
        slack_webhook_url: Slack incoming webhook, disabled when None
        discord_webhook_url: Discord webhook, disabled when None
        title_keywords: Any one must appear in the title (case-insensitive)
        required_labels: Any one must be present on the issue
        excluded_labels: Any one present vetoes the notification
        issues_only: Ignore pull requests
        reaction_threshold: Minimum reactions for a threshold notification
        comment_threshold: Minimum comments for a threshold notification
        message_template: Message body with placeholder tokens
        new_issue_prefix: Prefix for "created" notifications, default when None
        threshold_prefix: Prefix for "threshold_reached" notifications
        notify_on_create: Handle newly opened issues
        notify_on_threshold: Handle edits, comments and the batch sweep
        check_all_open_issues: Run the batch sweep for any non-issue event
        max_issues_to_check: Cap on issues examined by the batch sweep
        issue_state: Issue state the batch sweep lists
    """

    slack_webhook_url: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    title_keywords: Tuple[str, ...] = ()
    required_labels: Tuple[str, ...] = ()
    excluded_labels: Tuple[str, ...] = ()
    issues_only: bool = False
    reaction_threshold: int = Field(default=DEFAULT_REACTION_THRESHOLD, ge=0)
    comment_threshold: int = Field(default=DEFAULT_COMMENT_THRESHOLD, ge=0)
    message_template: str = DEFAULT_MESSAGE_TEMPLATE
    new_issue_prefix: Optional[str] = None
    threshold_prefix: Optional[str] = None
    notify_on_create: bool = False
    notify_on_threshold: bool = False
    check_all_open_issues: bool = False
    max_issues_to_check: int = Field(default=DEFAULT_MAX_ISSUES_TO_CHECK, ge=1)
    issue_state: Literal["open", "closed", "all"] = DEFAULT_ISSUE_STATE

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_inputs(cls, inputs) -> "NotifierConfig":
        """Build the config from raw action inputs (ActionInputSettings).

        Missing or empty inputs fall back to their documented defaults; this
        never raises for bad values.
        """
        issue_state = inputs.ISSUE_STATE.strip()
        if issue_state not in ISSUE_STATES:
            issue_state = DEFAULT_ISSUE_STATE

        return cls(
            slack_webhook_url=inputs.SLACK_WEBHOOK_URL.strip() or None,
            discord_webhook_url=inputs.DISCORD_WEBHOOK_URL.strip() or None,
            title_keywords=split_list(inputs.TITLE_KEYWORDS),
            required_labels=split_list(inputs.REQUIRED_LABELS),
            excluded_labels=split_list(inputs.EXCLUDED_LABELS),
            issues_only=parse_flag(inputs.ISSUES_ONLY),
            reaction_threshold=parse_int(
                inputs.REACTION_THRESHOLD, DEFAULT_REACTION_THRESHOLD
            ),
            comment_threshold=parse_int(
                inputs.COMMENT_THRESHOLD, DEFAULT_COMMENT_THRESHOLD
            ),
            message_template=inputs.MESSAGE_TEMPLATE.strip()
            or DEFAULT_MESSAGE_TEMPLATE,
            new_issue_prefix=inputs.NEW_ISSUE_PREFIX.strip() or None,
            threshold_prefix=inputs.THRESHOLD_PREFIX.strip() or None,
            notify_on_create=parse_flag(inputs.NOTIFY_ON_CREATE),
            notify_on_threshold=parse_flag(inputs.NOTIFY_ON_THRESHOLD),
            check_all_open_issues=parse_flag(inputs.CHECK_ALL_OPEN_ISSUES),
            max_issues_to_check=parse_int(
                inputs.MAX_ISSUES_TO_CHECK, DEFAULT_MAX_ISSUES_TO_CHECK, minimum=1
            ),
            issue_state=issue_state,
        )


class DeliveryReport(BaseModel):
    """Outcome of sending one notification to the configured endpoints."""

    issue_number: int
    reason: NotificationReason
    delivered: List[str] = []
    failed: List[str] = []

    @property
    def attempted(self) -> int:
        return len(self.delivered) + len(self.failed)
