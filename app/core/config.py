"""Issue notifier configuration settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when the run context cannot be resolved from the environment."""


class ActionInputSettings(BaseSettings):
    """Raw action inputs.

    GitHub Actions exposes each `with:` input as an ``INPUT_<NAME>``
    environment variable. Values are kept as plain strings here; parsing,
    trimming and defaulting happen in ``NotifierConfig.from_inputs``.

    Environment Variables:
        INPUT_SLACK_WEBHOOK_URL: Slack incoming webhook URL
        INPUT_DISCORD_WEBHOOK_URL: Discord webhook URL
        INPUT_TITLE_KEYWORDS: Comma separated keywords matched against titles
        INPUT_REQUIRED_LABELS: Comma separated labels, at least one required
        INPUT_EXCLUDED_LABELS: Comma separated labels that veto a notification
        INPUT_ISSUES_ONLY: "true" to ignore pull requests
        INPUT_REACTION_THRESHOLD: Minimum reactions (default 5)
        INPUT_COMMENT_THRESHOLD: Minimum comments (default 3)
        INPUT_MESSAGE_TEMPLATE: Message body template
        INPUT_NEW_ISSUE_PREFIX: Prefix for new issue notifications
        INPUT_THRESHOLD_PREFIX: Prefix for threshold notifications
        INPUT_NOTIFY_ON_CREATE: "true" to notify when issues are opened
        INPUT_NOTIFY_ON_THRESHOLD: "true" to notify when thresholds are met
        INPUT_CHECK_ALL_OPEN_ISSUES: "true" to run the batch sweep
        INPUT_MAX_ISSUES_TO_CHECK: Batch sweep cap (default 100)
        INPUT_ISSUE_STATE: open, closed or all (default open)
    """

    SLACK_WEBHOOK_URL: str = ""
    DISCORD_WEBHOOK_URL: str = ""
    TITLE_KEYWORDS: str = ""
    REQUIRED_LABELS: str = ""
    EXCLUDED_LABELS: str = ""
    ISSUES_ONLY: str = ""
    REACTION_THRESHOLD: str = ""
    COMMENT_THRESHOLD: str = ""
    MESSAGE_TEMPLATE: str = ""
    NEW_ISSUE_PREFIX: str = ""
    THRESHOLD_PREFIX: str = ""
    NOTIFY_ON_CREATE: str = ""
    NOTIFY_ON_THRESHOLD: str = ""
    CHECK_ALL_OPEN_ISSUES: str = ""
    MAX_ISSUES_TO_CHECK: str = ""
    ISSUE_STATE: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="INPUT_",
        case_sensitive=True,
        extra="ignore",
    )


class GitHubSettings(BaseSettings):
    """GitHub workflow context.

    Environment Variables:
        GITHUB_TOKEN: Token used for the REST API
        GITHUB_REPOSITORY: owner/repo of the repository running the workflow
        GITHUB_EVENT_NAME: Name of the triggering event
        GITHUB_EVENT_PATH: Path to the JSON event payload
        GITHUB_API_URL: REST API base URL
        GITHUB_SERVER_URL: Web base URL used to build repository links
    """

    GITHUB_TOKEN: str = ""
    GITHUB_REPOSITORY: str = ""
    GITHUB_EVENT_NAME: str = ""
    GITHUB_EVENT_PATH: str = ""
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_SERVER_URL: str = "https://github.com"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class HttpSettings(BaseSettings):
    """Outbound HTTP configuration."""

    TIMEOUT_SECONDS: int = Field(default=30, alias="HTTP_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Issue notifier configuration settings."""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"

    inputs: ActionInputSettings
    github: GitHubSettings
    http: HttpSettings

    @property
    def use_json_logs(self) -> bool:
        """Check if log lines should be rendered as JSON."""
        return self.LOG_FORMAT.strip().lower() == "json"

    def __init__(self, **kwargs):
        settings_map = {
            "inputs": ActionInputSettings,
            "github": GitHubSettings,
            "http": HttpSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
