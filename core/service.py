"""
Provider-agnostic badge service.

Every provider exposes the same capability set:

  fetch_fork_count(owner, repo)
  fetch_issue_count(owner, repo, state)
  fetch_pull_request_count(owner, repo, state)
  fetch_stargazer_count(owner, repo)
  handle(request) -> ResolvedBadgeParams

Subclasses only supply endpoints and response parsing; state tables live in
core.states and the override merge in core.resolver.
"""
import logging
from typing import Any, Dict, Optional

import requests

from core.config import DEFAULT_TIMEOUT
from core.errors import FetchError, UnknownMetricError
from core.models import BadgeRequest, Metric, MetricResult, Provider, ResolvedBadgeParams
from core.resolver import apply_overrides, computed_params, resolve_badge_params
from core.states import normalize

logger = logging.getLogger(__name__)

USER_AGENT = "repo-badges/1.0"


class RepositoryService:
    provider: Provider = Provider.STATIC
    # URL path segment -> metric
    request_types: Dict[str, Metric] = {
        "forks": Metric.FORKS,
        "issues": Metric.ISSUES,
        "pull-requests": Metric.PULL_REQUESTS,
        "stars": Metric.STARS,
    }

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self.headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}

    # ── Capability set ──────────────────────────────────────────────────────

    def fetch_fork_count(self, owner: str, repo: str) -> int:
        raise NotImplementedError

    def fetch_issue_count(self, owner: str, repo: str, state: str) -> int:
        raise NotImplementedError

    def fetch_pull_request_count(self, owner: str, repo: str, state: str) -> int:
        raise NotImplementedError

    def fetch_stargazer_count(self, owner: str, repo: str) -> int:
        raise NotImplementedError

    # ── Dispatch ────────────────────────────────────────────────────────────

    def metric_for(self, request_type: str) -> Metric:
        metric = self.request_types.get(request_type)
        if metric is None:
            raise UnknownMetricError(self.provider.value, request_type)
        return metric

    def fetch(self, metric: Metric, owner: str, repo: str, state: str = "") -> int:
        if metric is Metric.FORKS:
            return self.fetch_fork_count(owner, repo)
        if metric is Metric.ISSUES:
            return self.fetch_issue_count(owner, repo, state)
        if metric is Metric.PULL_REQUESTS:
            return self.fetch_pull_request_count(owner, repo, state)
        if metric is Metric.STARS:
            return self.fetch_stargazer_count(owner, repo)
        raise UnknownMetricError(self.provider.value, str(metric))

    def fetch_result(self, metric: Metric, owner: str, repo: str, state: str = "") -> MetricResult:
        try:
            count = self.fetch(metric, owner, repo, state)
        except FetchError as e:
            logger.warning(f"[{self.provider.value}] {owner}/{repo} {metric.value}: {e.message}")
            return MetricResult(error=e.message)
        return MetricResult(count=count)

    def handle(self, request: BadgeRequest) -> ResolvedBadgeParams:
        state_filter, subject = normalize(self.provider, request.metric, request.state)
        result = self.fetch_result(request.metric, request.owner, request.repo, state_filter)
        return resolve_badge_params(subject, result, request.overrides)

    # ── HTTP plumbing ───────────────────────────────────────────────────────

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Single outbound call; every failure mode becomes a FetchError."""
        try:
            r = requests.request(method, url, headers=self.headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise FetchError(str(e))
        if not r.ok:
            raise FetchError(f"{r.status_code} {r.reason or ''}".strip())
        return r

    def _get(self, url: str, params: Optional[Any] = None) -> requests.Response:
        return self._request("GET", url, params=params)

    @staticmethod
    def _json(r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError:
            raise FetchError("invalid JSON response")


class StaticService(RepositoryService):
    """Badge with fixed texts; never touches the network."""
    provider = Provider.STATIC
    request_types: Dict[str, Metric] = {}

    SUBJECT = "static"
    STATUS = "badge"

    def handle(self, request: BadgeRequest) -> ResolvedBadgeParams:
        return apply_overrides(computed_params(self.SUBJECT, self.STATUS), request.overrides)
