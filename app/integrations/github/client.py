"""GitHub REST client for reading issues of the workflow repository."""

import json
from typing import Any, Dict, List, Optional

import requests

from core.config import ConfigurationError, settings
from core.logging import get_module_logger
from models.issues import Issue, IssueEvent, Repository

logger = get_module_logger()

API_VERSION = "2022-11-28"


class GitHubApiError(Exception):
    """Raised when a GitHub API call fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Issue reads scoped to a single repository.

    Attributes:
        repository: Repository all calls are made against
        api_url: REST API base URL
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        repository: Repository,
        token: str = "",
        api_url: str = "https://api.github.com",
        timeout: int = 30,
    ) -> None:
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": "issue-notifier",
            }
        )
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        self._logger = logger.bind(repository=repository.full_name)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.api_url}/repos/{self.repository.owner}/{self.repository.repo}{path}"
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self._logger.error("github_request_failed", path=path, error=str(e))
            raise GitHubApiError(f"GET {path} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            message = response.text[:200]
            self._logger.error(
                "github_request_failed",
                path=path,
                status_code=response.status_code,
                error=message,
            )
            raise GitHubApiError(
                f"GET {path} returned {response.status_code}: {message}",
                status_code=response.status_code,
            )
        return response.json()

    def get_issue(self, number: int) -> Issue:
        """Fetch the full, current record of an issue or pull request."""
        data = self._get(f"/issues/{number}")
        return Issue.model_validate(data)

    def list_issues(self, state: str, per_page: int, page: int) -> List[Issue]:
        """List one page of issues, most recently updated first.

        An empty list means there are no more pages.
        """
        data = self._get(
            "/issues",
            params={
                "state": state,
                "per_page": per_page,
                "page": page,
                "sort": "updated",
                "direction": "desc",
            },
        )
        return [Issue.model_validate(item) for item in data]


def get_repository() -> Repository:
    """Resolve the workflow repository from GITHUB_REPOSITORY."""
    try:
        return Repository.from_full_name(
            settings.github.GITHUB_REPOSITORY, settings.github.GITHUB_SERVER_URL
        )
    except ValueError as e:
        raise ConfigurationError(f"GITHUB_REPOSITORY is not set correctly: {e}") from e


def get_client(repository: Repository) -> GitHubClient:
    return GitHubClient(
        repository,
        token=settings.github.GITHUB_TOKEN,
        api_url=settings.github.GITHUB_API_URL,
        timeout=settings.http.TIMEOUT_SECONDS,
    )


def load_event(
    event_name: Optional[str] = None, event_path: Optional[str] = None
) -> IssueEvent:
    """Read the triggering event from the workflow environment.

    Scheduled and manually dispatched runs may have no payload file; they
    yield an event with an empty payload.
    """
    event_name = event_name if event_name is not None else settings.github.GITHUB_EVENT_NAME
    event_path = event_path if event_path is not None else settings.github.GITHUB_EVENT_PATH

    payload: Dict[str, Any] = {}
    if event_path:
        try:
            with open(event_path, encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Unable to read event payload at {event_path}: {e}"
            ) from e

    return IssueEvent.model_validate({"event_name": event_name, "payload": payload})
