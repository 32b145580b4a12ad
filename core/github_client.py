from typing import Any, Dict, List

from core.config import DEFAULT_TIMEOUT
from core.errors import FetchError
from core.models import Provider
from core.service import RepositoryService

API = "https://api.github.com/graphql"

# One query per metric; `states` is always sent, an unfiltered request lists
# every state value instead of leaving the argument out.
FORKS_QUERY = """
query ($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    forks {
      totalCount
    }
  }
}
"""

ISSUES_QUERY = """
query ($owner: String!, $repo: String!, $states: [IssueState!]) {
  repository(owner: $owner, name: $repo) {
    issues(states: $states) {
      totalCount
    }
  }
}
"""

PULL_REQUESTS_QUERY = """
query ($owner: String!, $repo: String!, $states: [PullRequestState!]) {
  repository(owner: $owner, name: $repo) {
    pullRequests(states: $states) {
      totalCount
    }
  }
}
"""

STARGAZERS_QUERY = """
query ($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    stargazers {
      totalCount
    }
  }
}
"""

ISSUE_STATES = {
    "open": ["OPEN"],
    "closed": ["CLOSED"],
}
ALL_ISSUE_STATES = ["OPEN", "CLOSED"]

PULL_REQUEST_STATES = {
    "open": ["OPEN"],
    "closed": ["CLOSED"],
    "merged": ["MERGED"],
}
ALL_PULL_REQUEST_STATES = ["OPEN", "CLOSED", "MERGED"]


class GitHubService(RepositoryService):
    """
    GitHub GraphQL integration.
    The access token is handed in by the caller; no environment lookups here.
    """
    provider = Provider.GITHUB

    def __init__(self, token: str = "", timeout: float = DEFAULT_TIMEOUT, api_url: str = API):
        super().__init__(timeout=timeout)
        self.api_url = api_url
        self.headers["Accept"] = "application/vnd.github+json"
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _query(self, query: str, variables: Dict[str, Any], connection: str) -> int:
        """Run one query and return repository.<connection>.totalCount."""
        r = self._request("POST", self.api_url, json={"query": query, "variables": variables})
        data = self._json(r)
        if not isinstance(data, dict):
            raise FetchError("unexpected response body")

        # GraphQL reports failures inside a 200 response
        errors = data.get("errors")
        if errors:
            first = errors[0] if isinstance(errors, list) else errors
            message = first.get("message") if isinstance(first, dict) else None
            if not isinstance(message, str) or not message:
                message = "unknown GraphQL error"
            raise FetchError(message)

        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            raise FetchError("unexpected response body")
        repository = payload.get("repository")
        if not repository:
            raise FetchError("repository not found")
        if not isinstance(repository, dict):
            raise FetchError("unexpected response body")
        node = repository.get(connection) or {}
        if not isinstance(node, dict):
            raise FetchError("unexpected response body")
        count = node.get("totalCount")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise FetchError(f"missing {connection}.totalCount in response")
        return count

    def fetch_fork_count(self, owner: str, repo: str) -> int:
        return self._query(FORKS_QUERY, {"owner": owner, "repo": repo}, "forks")

    def fetch_issue_count(self, owner: str, repo: str, state: str) -> int:
        states: List[str] = ISSUE_STATES.get(state, ALL_ISSUE_STATES)
        variables = {"owner": owner, "repo": repo, "states": states}
        return self._query(ISSUES_QUERY, variables, "issues")

    def fetch_pull_request_count(self, owner: str, repo: str, state: str) -> int:
        states: List[str] = PULL_REQUEST_STATES.get(state, ALL_PULL_REQUEST_STATES)
        variables = {"owner": owner, "repo": repo, "states": states}
        return self._query(PULL_REQUESTS_QUERY, variables, "pullRequests")

    def fetch_stargazer_count(self, owner: str, repo: str) -> int:
        return self._query(STARGAZERS_QUERY, {"owner": owner, "repo": repo}, "stargazers")
