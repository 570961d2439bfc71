from datetime import datetime, timezone

import pytest

from models.issues import Issue, IssueEvent, Repository


def test_issue_defaults_missing_counts_to_zero():
    issue = Issue.model_validate({"number": 1, "title": "t"})

    assert issue.reaction_count == 0
    assert issue.comment_count == 0
    assert issue.author == ""
    assert issue.label_names == []
    assert issue.is_pull_request is False


def test_issue_reads_api_fields():
    issue = Issue.model_validate(
        {
            "number": 12,
            "title": "Crash",
            "user": {"login": "octocat", "id": 1},
            "html_url": "https://github.com/test/repo/issues/12",
            "labels": [{"name": "bug", "color": "f00"}, "triage"],
            "reactions": {"total_count": 4, "+1": 4},
            "comments": 2,
            "pull_request": {},
            "state": "open",
        }
    )

    assert issue.author == "octocat"
    assert issue.label_names == ["bug", "triage"]
    assert issue.reaction_count == 4
    assert issue.comment_count == 2
    assert issue.is_pull_request is True


def test_issue_null_labels():
    issue = Issue.model_validate({"number": 1, "labels": None})

    assert issue.label_names == []


def test_created_datetime_parses_utc_suffix():
    issue = Issue.model_validate({"number": 1, "created_at": "2024-05-01T10:30:00Z"})

    assert issue.created_datetime == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


def test_created_datetime_missing():
    assert Issue.model_validate({"number": 1}).created_datetime is None


def test_created_datetime_without_offset_is_utc():
    issue = Issue.model_validate({"number": 1, "created_at": "2024-03-10T10:00:00"})

    assert issue.created_datetime == datetime(2024, 3, 10, 10, 0, tzinfo=timezone.utc)


def test_created_datetime_keeps_explicit_offset():
    issue = Issue.model_validate(
        {"number": 1, "created_at": "2024-03-10T12:00:00+02:00"}
    )

    assert issue.created_datetime == datetime(2024, 3, 10, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("created_at", ["not-a-date", "2024-13-45T99:00:00Z"])
def test_created_datetime_unparsable(created_at):
    issue = Issue.model_validate({"number": 1, "created_at": created_at})

    assert issue.created_datetime is None


def test_event_without_issue():
    event = IssueEvent.model_validate({"event_name": "schedule", "payload": {}})

    assert event.payload.action == ""
    assert event.payload.issue is None


def test_repository_from_full_name():
    repository = Repository.from_full_name("octo-org/widgets", "https://github.example.com/")

    assert repository.owner == "octo-org"
    assert repository.repo == "widgets"
    assert repository.full_name == "octo-org/widgets"
    assert repository.url == "https://github.example.com/octo-org/widgets"
    assert repository.markdown_link == (
        "[octo-org/widgets](https://github.example.com/octo-org/widgets)"
    )


@pytest.mark.parametrize("full_name", ["", "widgets", "/widgets", "octo-org/"])
def test_repository_from_full_name_invalid(full_name):
    with pytest.raises(ValueError):
        Repository.from_full_name(full_name)
