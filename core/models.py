from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Provider(str, Enum):
    STATIC = "static"
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"


class Metric(str, Enum):
    FORKS = "forks"
    ISSUES = "issues"
    PULL_REQUESTS = "pull_requests"
    STARS = "stars"


class BadgeOverrides(BaseModel):
    """Display values supplied through the query string."""
    model_config = ConfigDict(frozen=True)

    color: str = ""
    status: str = ""
    subject: str = ""
    icon: str = ""
    style: str = ""


class BadgeRequest(BaseModel):
    """
    Immutable description of one inbound badge request.
    Built once from the route and query string, discarded after the response.
    """
    model_config = ConfigDict(frozen=True)

    provider: Provider
    owner: str = ""
    repo: str = ""
    metric: Optional[Metric] = None
    state: str = Field("", description="Raw `state` query value, provider vocabulary")
    overrides: BadgeOverrides = Field(default_factory=BadgeOverrides)


class MetricResult(BaseModel):
    """Outcome of a single fetch: a non-negative count or an error message."""
    model_config = ConfigDict(frozen=True)

    count: Optional[int] = Field(None, ge=0)
    error: Optional[str] = None

    @model_validator(mode="after")
    def _count_xor_error(self) -> "MetricResult":
        if (self.count is None) == (self.error is None):
            raise ValueError("MetricResult needs exactly one of count or error.")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class ResolvedBadgeParams(BaseModel):
    """Final values handed to the renderer."""
    model_config = ConfigDict(frozen=True)

    subject: str
    status: str = Field(..., min_length=1)
    color: str = ""
    icon: str = ""
    style: str = ""
