from typing import List, Tuple

from core.config import DEFAULT_TIMEOUT
from core.models import Provider
from core.service import RepositoryService
from core.states import BITBUCKET_ISSUE_STATES, BITBUCKET_PR_STATES
from core.utils import encode_segment, read_count

API = "https://api.bitbucket.org/2.0"


class BitbucketService(RepositoryService):
    """
    Bitbucket Cloud REST 2.0 integration.

    Every listing is a paginated collection carrying a `size` field with the
    total across pages; `pagelen=1` keeps the body small. Bitbucket has no
    stars, watchers are the closest equivalent.
    """
    provider = Provider.BITBUCKET

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, api_url: str = API):
        super().__init__(timeout=timeout)
        self.api_url = api_url

    def repository_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repositories/{encode_segment(owner)}/{encode_segment(repo)}"

    def _collection_size(self, url: str, params: List[Tuple[str, str]]) -> int:
        r = self._get(url, params=[("pagelen", "1")] + params)
        return read_count(self._json(r), "size")

    def fetch_fork_count(self, owner: str, repo: str) -> int:
        return self._collection_size(f"{self.repository_url(owner, repo)}/forks", [])

    def fetch_issue_count(self, owner: str, repo: str, state: str) -> int:
        params = []
        if state in BITBUCKET_ISSUE_STATES:
            params.append(("q", f'state="{state}"'))
        return self._collection_size(f"{self.repository_url(owner, repo)}/issues", params)

    def fetch_pull_request_count(self, owner: str, repo: str, state: str) -> int:
        # The API defaults to OPEN only, so "all" has to list each state
        states = [state] if state in BITBUCKET_PR_STATES else list(BITBUCKET_PR_STATES)
        params = [("state", s.upper()) for s in states]
        return self._collection_size(f"{self.repository_url(owner, repo)}/pullrequests", params)

    def fetch_stargazer_count(self, owner: str, repo: str) -> int:
        return self._collection_size(f"{self.repository_url(owner, repo)}/watchers", [])
