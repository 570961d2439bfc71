import os
from unittest.mock import patch

from core.config import ActionInputSettings, GitHubSettings, HttpSettings, Settings


@patch.dict(
    os.environ,
    {"INPUT_REACTION_THRESHOLD": "7", "INPUT_TITLE_KEYWORDS": "urgent,security"},
)
def test_action_inputs_read_input_prefixed_variables():
    inputs = ActionInputSettings(_env_file=None)

    assert inputs.REACTION_THRESHOLD == "7"
    assert inputs.TITLE_KEYWORDS == "urgent,security"
    assert inputs.COMMENT_THRESHOLD == ""


@patch.dict(
    os.environ,
    {"GITHUB_REPOSITORY": "test/repo", "GITHUB_EVENT_NAME": "issues"},
)
def test_github_settings_from_environment():
    github = GitHubSettings(_env_file=None)

    assert github.GITHUB_REPOSITORY == "test/repo"
    assert github.GITHUB_EVENT_NAME == "issues"
    assert github.GITHUB_SERVER_URL == "https://github.com"


@patch.dict(os.environ, {"HTTP_TIMEOUT_SECONDS": "5"})
def test_http_timeout_from_environment():
    assert HttpSettings(_env_file=None).TIMEOUT_SECONDS == 5


def test_settings_builds_sub_settings():
    s = Settings(LOG_FORMAT="JSON")

    assert isinstance(s.inputs, ActionInputSettings)
    assert isinstance(s.github, GitHubSettings)
    assert isinstance(s.http, HttpSettings)
    assert s.use_json_logs is True
    assert Settings(LOG_FORMAT="console").use_json_logs is False
