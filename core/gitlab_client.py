from typing import Dict, Optional

from core.config import DEFAULT_TIMEOUT
from core.models import Metric, Provider
from core.service import RepositoryService
from core.states import GITLAB_ISSUE_STATES, GITLAB_MR_STATES
from core.utils import gitlab_project_path, parse_total_header, read_count

API = "https://gitlab.com/api/v4"


class GitLabService(RepositoryService):
    """
    GitLab REST v4 integration.

    Issue and merge request listings are paginated, so their counts come from
    the X-Total header; forks and stars are fields of the project itself.
    """
    provider = Provider.GITLAB
    request_types: Dict[str, Metric] = {
        "forks": Metric.FORKS,
        "issues": Metric.ISSUES,
        "merge-requests": Metric.PULL_REQUESTS,
        "stars": Metric.STARS,
    }

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, api_url: str = API):
        super().__init__(timeout=timeout)
        self.api_url = api_url

    def project_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/projects/{gitlab_project_path(owner, repo)}"

    def _listing_total(self, url: str, state: Optional[str]) -> int:
        params = {"per_page": "1"}
        if state:
            params["state"] = state
        r = self._get(url, params=params)
        return parse_total_header(r.headers)

    def fetch_fork_count(self, owner: str, repo: str) -> int:
        r = self._get(self.project_url(owner, repo))
        return read_count(self._json(r), "forks_count")

    def fetch_issue_count(self, owner: str, repo: str, state: str) -> int:
        # Anything outside the issue vocabulary is sent unfiltered
        state = state if state in GITLAB_ISSUE_STATES else None
        return self._listing_total(f"{self.project_url(owner, repo)}/issues", state)

    def fetch_pull_request_count(self, owner: str, repo: str, state: str) -> int:
        state = state if state in GITLAB_MR_STATES else None
        return self._listing_total(f"{self.project_url(owner, repo)}/merge_requests", state)

    def fetch_stargazer_count(self, owner: str, repo: str) -> int:
        r = self._get(self.project_url(owner, repo))
        return read_count(self._json(r), "star_count")
