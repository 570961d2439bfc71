import pytest

from tests.factories import make_config, make_issue, make_repository


@pytest.fixture
def issue_factory():
    """Factory for creating Issue instances.

    Example:
        issue = issue_factory(title="Urgent crash", labels=["bug"])
    """
    return make_issue


@pytest.fixture
def config_factory():
    """Factory for creating NotifierConfig instances.

    Both triggers are enabled and no filters are set unless overridden.
    """
    return make_config


@pytest.fixture
def repository():
    return make_repository()
