"""GitHub module for reading workflow context and issues."""

from .client import (
    GitHubApiError,
    GitHubClient,
    get_client,
    get_repository,
    load_event,
)

__all__ = [
    "GitHubApiError",
    "GitHubClient",
    "get_client",
    "get_repository",
    "load_event",
]
