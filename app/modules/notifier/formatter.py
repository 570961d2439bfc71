"""Message formatting for issue notifications.

Templates use literal placeholder tokens such as ``{title}`` or
``{repo_link}``. Substitution is a single pass over the template: text
inserted for one token is never scanned again, so an issue titled
"{url}" stays "{url}" in the output. Unknown tokens are left untouched.
"""

import re
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Tuple

from models.issues import Issue, Repository
from models.notifications import (
    DEFAULT_NEW_ISSUE_PREFIX,
    DEFAULT_THRESHOLD_PREFIX,
    NotificationReason,
    NotifierConfig,
)

_TOKEN_PATTERN = re.compile(r"\{[a-z_]+\}")


def substitute(template: str, values: Mapping[str, object]) -> str:
    """Replace every known ``{token}`` in one pass."""

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        if token in values:
            return str(values[token])
        return token

    return _TOKEN_PATTERN.sub(_replace, template)


def time_since(
    created_at: Optional[datetime], now: Optional[datetime] = None
) -> Tuple[int, int, int]:
    """Whole minutes, hours and days elapsed since creation.

    A missing creation time, or one in the future, counts as zero.
    """
    if created_at is None:
        return 0, 0, 0
    now = now or datetime.now(timezone.utc)
    elapsed_seconds = max(0, int((now - created_at).total_seconds()))
    minutes = elapsed_seconds // 60
    hours = elapsed_seconds // 3600
    days = elapsed_seconds // 86400
    return minutes, hours, days


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_relative_time(
    created_at: Optional[datetime], now: Optional[datetime] = None
) -> str:
    """Render the age of an issue as "N units ago" using the largest unit."""
    minutes, hours, days = time_since(created_at, now)
    if days > 0:
        return _plural(days, "day")
    if hours > 0:
        return _plural(hours, "hour")
    if minutes > 0:
        return _plural(minutes, "minute")
    return "just now"


def repository_values(repository: Repository) -> Dict[str, str]:
    return {
        "{repo}": repository.full_name,
        "{repo_name}": repository.repo,
        "{repo_url}": repository.url,
        "{repo_link}": repository.markdown_link,
    }


def message_values(
    issue: Issue, repository: Repository, now: Optional[datetime] = None
) -> Dict[str, object]:
    created = issue.created_datetime
    minutes, hours, days = time_since(created, now)
    values: Dict[str, object] = {
        "{title}": issue.title,
        "{url}": issue.html_url,
        "{author}": issue.author,
        "{reactions}": issue.reaction_count,
        "{comments}": issue.comment_count,
        "{created_minutes_ago}": minutes,
        "{created_hours_ago}": hours,
        "{created_days_ago}": days,
        "{created_at}": issue.created_at or "",
        "{created_ago}": format_relative_time(created, now),
    }
    values.update(repository_values(repository))
    return values


def format_prefix(
    reason: NotificationReason, config: NotifierConfig, repository: Repository
) -> str:
    if reason == NotificationReason.CREATED:
        template = config.new_issue_prefix or DEFAULT_NEW_ISSUE_PREFIX
    else:
        template = config.threshold_prefix or DEFAULT_THRESHOLD_PREFIX
    return substitute(template, repository_values(repository))


def format_body(
    issue: Issue,
    config: NotifierConfig,
    repository: Repository,
    now: Optional[datetime] = None,
) -> str:
    """Fill the message template without the reason prefix."""
    return substitute(config.message_template, message_values(issue, repository, now))


def format_message(
    issue: Issue,
    reason: NotificationReason,
    config: NotifierConfig,
    repository: Repository,
    now: Optional[datetime] = None,
) -> str:
    """Build the full notification text: reason prefix, blank line, body."""
    body = format_body(issue, config, repository, now)
    prefix = format_prefix(reason, config, repository)
    return f"{prefix}\n\n{body}"
