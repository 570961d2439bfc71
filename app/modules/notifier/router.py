"""Event routing for the issue notifier.

Every run is driven by a single workflow event:

    issues/opened         -> filters on the payload snapshot   -> "created"
    issues/edited         -> re-fetch, filters and thresholds  -> "threshold_reached"
    issue_comment/created -> re-fetch, filters and thresholds  -> "threshold_reached"
    schedule              -> batch sweep over listed issues    -> "threshold_reached"

Collaborators are passed in explicitly: an ``IssueSource`` that reads issues
from the tracker and a ``notify`` callable that delivers one notification.
Errors on the single issue paths propagate to the caller; the batch sweep
logs its errors and stops early instead.
"""

from typing import Callable, List, Protocol

from core.logging import get_module_logger
from models.issues import EventPayload, Issue, IssueEvent
from models.notifications import NotificationReason, NotifierConfig
from modules.notifier.filters import (
    should_notify_for_issue,
    should_notify_for_thresholds,
)

logger = get_module_logger()

MAX_PAGE_SIZE = 100

Notify = Callable[[Issue, NotificationReason], object]


class IssueSource(Protocol):
    """Read access to the issue tracker."""

    def get_issue(self, number: int) -> Issue: ...

    def list_issues(self, state: str, per_page: int, page: int) -> List[Issue]: ...


def run(
    event: IssueEvent,
    config: NotifierConfig,
    issues: IssueSource,
    notify: Notify,
) -> None:
    """Dispatch a workflow event to its handler."""
    logger.info(
        "processing_event",
        event_name=event.event_name,
        action=event.payload.action,
    )

    if event.event_name == "issues":
        handle_issue_event(event.payload, config, issues, notify)
    elif event.event_name == "issue_comment":
        handle_issue_comment_event(event.payload, config, issues, notify)
    elif event.event_name == "schedule" or config.check_all_open_issues:
        handle_batch_check_event(config, issues, notify)
    else:
        logger.info("event_not_supported", event_name=event.event_name)


def _payload_issue(payload: EventPayload) -> Issue:
    if payload.issue is None:
        raise ValueError(f"Event payload for action '{payload.action}' has no issue")
    return payload.issue


def _notify_if_threshold_met(
    number: int,
    config: NotifierConfig,
    issues: IssueSource,
    notify: Notify,
) -> None:
    # Counts in the payload may be stale, so decide on a fresh copy
    updated_issue = issues.get_issue(number)
    if should_notify_for_issue(updated_issue, config) and should_notify_for_thresholds(
        updated_issue, config
    ):
        notify(updated_issue, NotificationReason.THRESHOLD_REACHED)


def handle_issue_event(
    payload: EventPayload,
    config: NotifierConfig,
    issues: IssueSource,
    notify: Notify,
) -> None:
    if payload.action == "opened" and config.notify_on_create:
        issue = _payload_issue(payload)
        if should_notify_for_issue(issue, config):
            notify(issue, NotificationReason.CREATED)
    elif payload.action == "edited" and config.notify_on_threshold:
        issue = _payload_issue(payload)
        _notify_if_threshold_met(issue.number, config, issues, notify)


def handle_issue_comment_event(
    payload: EventPayload,
    config: NotifierConfig,
    issues: IssueSource,
    notify: Notify,
) -> None:
    if not config.notify_on_threshold:
        return

    if payload.action == "created":
        issue = _payload_issue(payload)
        _notify_if_threshold_met(issue.number, config, issues, notify)


def get_all_issues(config: NotifierConfig, issues: IssueSource) -> List[Issue]:
    """Collect up to max_issues_to_check fully fetched issues.

    Pages are read until one comes back empty or the cap is reached. A fetch
    error ends the enumeration and returns what was gathered so far.
    """
    collected: List[Issue] = []
    page = 1
    per_page = min(MAX_PAGE_SIZE, config.max_issues_to_check)

    while len(collected) < config.max_issues_to_check:
        try:
            page_issues = issues.list_issues(
                state=config.issue_state, per_page=per_page, page=page
            )
            if not page_issues:
                break

            for listed in page_issues:
                if len(collected) >= config.max_issues_to_check:
                    break
                collected.append(issues.get_issue(listed.number))

            page += 1
        except Exception as e:
            logger.error("issues_page_fetch_failed", page=page, error=str(e))
            break

    return collected


def handle_batch_check_event(
    config: NotifierConfig,
    issues: IssueSource,
    notify: Notify,
) -> int:
    """Check existing issues against filters and thresholds.

    Returns:
        int: Number of issues notified.
    """
    if not config.notify_on_threshold:
        logger.info("batch_check_disabled", reason="notify_on_threshold is false")
        return 0

    logger.info(
        "batch_check_started",
        issue_state=config.issue_state,
        max_issues=config.max_issues_to_check,
    )

    notified_count = 0
    try:
        candidates = get_all_issues(config, issues)
        logger.info("batch_check_issues_found", count=len(candidates))

        for issue in candidates:
            if should_notify_for_issue(issue, config) and should_notify_for_thresholds(
                issue, config
            ):
                notify(issue, NotificationReason.THRESHOLD_REACHED)
                notified_count += 1
    except Exception as e:
        logger.error("batch_check_failed", error=str(e), notified=notified_count)
        return notified_count

    logger.info("batch_check_completed", notified=notified_count)
    return notified_count
