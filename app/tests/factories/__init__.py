"""Test data factories for deterministic test data generation."""

from tests.factories.issues import (
    FakeIssueSource,
    make_config,
    make_event,
    make_issue,
    make_repository,
)

__all__ = [
    "FakeIssueSource",
    "make_config",
    "make_event",
    "make_issue",
    "make_repository",
]
