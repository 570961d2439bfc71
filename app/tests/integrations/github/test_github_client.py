import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from core.config import ConfigurationError
from integrations.github import client as github_client
from integrations.github.client import GitHubApiError, GitHubClient
from models.issues import Repository


def _response(status_code=200, data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data
    response.text = text
    return response


@pytest.fixture
def client():
    gh = GitHubClient(Repository(owner="test", repo="repo"), token="secret", timeout=5)
    gh._session = MagicMock()
    return gh


def test_client_sets_auth_header():
    gh = GitHubClient(Repository(owner="test", repo="repo"), token="secret")

    assert gh._session.headers["Authorization"] == "Bearer secret"
    assert gh._session.headers["Accept"] == "application/vnd.github+json"


def test_client_without_token_has_no_auth_header():
    gh = GitHubClient(Repository(owner="test", repo="repo"))

    assert "Authorization" not in gh._session.headers


def test_get_issue(client):
    client._session.get.return_value = _response(
        data={
            "number": 5,
            "title": "Crash",
            "reactions": {"total_count": 3},
            "comments": 1,
        }
    )

    issue = client.get_issue(5)

    client._session.get.assert_called_once_with(
        "https://api.github.com/repos/test/repo/issues/5", params=None, timeout=5
    )
    assert issue.number == 5
    assert issue.reaction_count == 3


def test_list_issues(client):
    client._session.get.return_value = _response(
        data=[{"number": 1, "title": "a"}, {"number": 2, "title": "b"}]
    )

    issues = client.list_issues(state="open", per_page=50, page=2)

    client._session.get.assert_called_once_with(
        "https://api.github.com/repos/test/repo/issues",
        params={
            "state": "open",
            "per_page": 50,
            "page": 2,
            "sort": "updated",
            "direction": "desc",
        },
        timeout=5,
    )
    assert [issue.number for issue in issues] == [1, 2]


def test_list_issues_empty_page(client):
    client._session.get.return_value = _response(data=[])

    assert client.list_issues(state="all", per_page=100, page=3) == []


def test_error_status_raises(client):
    client._session.get.return_value = _response(status_code=404, text="Not Found")

    with pytest.raises(GitHubApiError) as exc_info:
        client.get_issue(99)

    assert exc_info.value.status_code == 404
    assert "404" in str(exc_info.value)


def test_transport_error_raises(client):
    client._session.get.side_effect = requests.ConnectionError("unreachable")

    with pytest.raises(GitHubApiError) as exc_info:
        client.get_issue(1)

    assert exc_info.value.status_code is None


@patch("integrations.github.client.settings")
def test_get_repository(mock_settings):
    mock_settings.github.GITHUB_REPOSITORY = "test/repo"
    mock_settings.github.GITHUB_SERVER_URL = "https://github.com"

    repository = github_client.get_repository()

    assert repository.full_name == "test/repo"


@patch("integrations.github.client.settings")
def test_get_repository_missing(mock_settings):
    mock_settings.github.GITHUB_REPOSITORY = ""
    mock_settings.github.GITHUB_SERVER_URL = "https://github.com"

    with pytest.raises(ConfigurationError):
        github_client.get_repository()


@patch("integrations.github.client.settings")
def test_get_client_uses_settings(mock_settings):
    mock_settings.github.GITHUB_TOKEN = "token"
    mock_settings.github.GITHUB_API_URL = "https://ghe.example.com/api/v3/"
    mock_settings.http.TIMEOUT_SECONDS = 12

    gh = github_client.get_client(Repository(owner="test", repo="repo"))

    assert gh.api_url == "https://ghe.example.com/api/v3"
    assert gh.timeout == 12


def test_load_event_reads_payload_file(tmp_path):
    event_file = tmp_path / "event.json"
    event_file.write_text(
        json.dumps(
            {
                "action": "created",
                "issue": {"number": 4, "title": "Crash", "comments": 6},
                "comment": {"body": "me too"},
            }
        )
    )

    event = github_client.load_event("issue_comment", str(event_file))

    assert event.event_name == "issue_comment"
    assert event.payload.action == "created"
    assert event.payload.issue.number == 4
    assert event.payload.issue.comment_count == 6


def test_load_event_without_payload():
    event = github_client.load_event("schedule", "")

    assert event.event_name == "schedule"
    assert event.payload.issue is None


def test_load_event_unreadable_file(tmp_path):
    with pytest.raises(ConfigurationError):
        github_client.load_event("issues", str(tmp_path / "missing.json"))
