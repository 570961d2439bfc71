"""Filter and threshold checks applied to an issue before notifying."""

from core.logging import get_module_logger
from models.issues import Issue
from models.notifications import NotifierConfig

logger = get_module_logger()


def should_notify_for_issue(issue: Issue, config: NotifierConfig) -> bool:
    """Apply the pull request, keyword and label filters in order.

    Empty filter lists are no constraint. The first failing check rejects the
    issue and logs why.
    """
    if config.issues_only and issue.is_pull_request:
        logger.info(
            "issue_filtered",
            issue_number=issue.number,
            reason="pull_request_with_issues_only",
        )
        return False

    if config.title_keywords:
        title = issue.title.lower()
        if not any(keyword.lower() in title for keyword in config.title_keywords):
            logger.info(
                "issue_filtered",
                issue_number=issue.number,
                reason="missing_title_keyword",
                keywords=list(config.title_keywords),
            )
            return False

    labels = set(issue.label_names)

    if config.required_labels and labels.isdisjoint(config.required_labels):
        logger.info(
            "issue_filtered",
            issue_number=issue.number,
            reason="missing_required_label",
            required_labels=list(config.required_labels),
        )
        return False

    if config.excluded_labels and not labels.isdisjoint(config.excluded_labels):
        logger.info(
            "issue_filtered",
            issue_number=issue.number,
            reason="has_excluded_label",
            excluded_labels=list(config.excluded_labels),
        )
        return False

    return True


def should_notify_for_thresholds(issue: Issue, config: NotifierConfig) -> bool:
    """Either the reaction or the comment threshold is enough."""
    reaction_count = issue.reaction_count
    comment_count = issue.comment_count

    meets_reaction_threshold = reaction_count >= config.reaction_threshold
    meets_comment_threshold = comment_count >= config.comment_threshold

    logger.info(
        "threshold_evaluated",
        issue_number=issue.number,
        reactions=reaction_count,
        comments=comment_count,
        reaction_threshold=config.reaction_threshold,
        comment_threshold=config.comment_threshold,
        met=meets_reaction_threshold or meets_comment_threshold,
    )

    return meets_reaction_threshold or meets_comment_threshold
