from datetime import datetime, timezone
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class IssueUser(BaseModel):
    login: str = ""

    model_config = ConfigDict(extra="ignore")


class IssueLabel(BaseModel):
    name: str

    model_config = ConfigDict(extra="ignore")


class IssueReactions(BaseModel):
    total_count: int = 0

    model_config = ConfigDict(extra="ignore")


class Issue(BaseModel):
    """Issue (or pull request) as returned by the GitHub REST API and webhooks.

    Only the fields the notifier reads are modelled; everything else in the
    payload is ignored. Counts are optional because event snapshots do not
    always carry them.
    """

    number: int = 0
    title: str = ""
    html_url: str = ""
    user: Optional[IssueUser] = None
    created_at: Optional[str] = None
    labels: List[IssueLabel] = []
    reactions: Optional[IssueReactions] = None
    comments: Optional[int] = None
    pull_request: Optional[dict] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("labels", mode="before")
    @classmethod
    def normalize_labels(cls, v: Any) -> Any:
        """Accept bare label names as well as label objects."""
        if v is None:
            return []
        if isinstance(v, list):
            return [{"name": label} if isinstance(label, str) else label for label in v]
        return v

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels]

    @property
    def author(self) -> str:
        return self.user.login if self.user else ""

    @property
    def reaction_count(self) -> int:
        return self.reactions.total_count if self.reactions else 0

    @property
    def comment_count(self) -> int:
        return self.comments or 0

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None

    @property
    def created_datetime(self) -> Optional[datetime]:
        """Creation time parsed from the ISO-8601 timestamp, if present.

        Timestamps without an offset are read as UTC. Unparsable values are
        treated as missing.
        """
        if not self.created_at:
            return None
        try:
            created = datetime.fromisoformat(self.created_at.replace("Z", "+00:00"))
        except ValueError:
            return None
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created


class EventPayload(BaseModel):
    action: str = ""
    issue: Optional[Issue] = None

    model_config = ConfigDict(extra="ignore")


class IssueEvent(BaseModel):
    """Triggering workflow event: its name plus the webhook payload."""

    event_name: str
    payload: EventPayload = Field(default_factory=EventPayload)


class Repository(BaseModel):
    """Repository the workflow runs in."""

    owner: str
    repo: str
    server_url: str = "https://github.com"

    @classmethod
    def from_full_name(
        cls, full_name: str, server_url: str = "https://github.com"
    ) -> "Repository":
        owner, _, repo = full_name.strip().partition("/")
        if not owner or not repo:
            raise ValueError(f"Expected owner/repo, got {full_name!r}")
        return cls(owner=owner, repo=repo, server_url=server_url.rstrip("/"))

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def url(self) -> str:
        return f"{self.server_url}/{self.full_name}"

    @property
    def markdown_link(self) -> str:
        return f"[{self.full_name}]({self.url})"
