import sys

from dotenv import load_dotenv

from core.config import settings
from core.logging import get_module_logger
from integrations.github import get_client, get_repository, load_event
from models.notifications import NotifierConfig
from modules.notifier import router
from modules.notifier.delivery import build_notifier

logger = get_module_logger()

load_dotenv()


def list_configs(config: NotifierConfig):
    """Log the effective configuration without the webhook secrets."""
    logger.info(
        "notifier_configuration",
        slack_enabled=config.slack_webhook_url is not None,
        discord_enabled=config.discord_webhook_url is not None,
        title_keywords=list(config.title_keywords),
        required_labels=list(config.required_labels),
        excluded_labels=list(config.excluded_labels),
        issues_only=config.issues_only,
        reaction_threshold=config.reaction_threshold,
        comment_threshold=config.comment_threshold,
        notify_on_create=config.notify_on_create,
        notify_on_threshold=config.notify_on_threshold,
        check_all_open_issues=config.check_all_open_issues,
        max_issues_to_check=config.max_issues_to_check,
        issue_state=config.issue_state,
    )


def main() -> int:
    """Run the notifier for the current workflow event.

    Returns:
        int: Process exit status, 1 when the run failed.
    """
    logger.info("action_startup")

    try:
        config = NotifierConfig.from_inputs(settings.inputs)
        list_configs(config)

        repository = get_repository()
        event = load_event()
        client = get_client(repository)

        router.run(event, config, client, build_notifier(config, repository))
    except Exception as e:
        logger.exception("action_failed", error=str(e))
        # Workflow command so the failure is annotated on the run
        print(f"::error::Action failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
