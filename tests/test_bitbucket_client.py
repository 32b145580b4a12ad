import unittest
from unittest.mock import patch

from core.bitbucket_client import BitbucketService
from core.errors import FetchError
from core.models import BadgeRequest, Metric, Provider
from helpers import fake_response

REPOSITORY = "https://api.bitbucket.org/2.0/repositories/atlassian/python-bitbucket"


@patch("core.service.requests.request")
class TestBitbucketServiceFetch(unittest.TestCase):
    def setUp(self) -> None:
        self.service = BitbucketService()

    def _call(self, mock_request):
        args, kwargs = mock_request.call_args
        return args[1], kwargs["params"]

    def test_fork_count(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 12, "values": []})
        self.assertEqual(self.service.fetch_fork_count("atlassian", "python-bitbucket"), 12)
        self.assertEqual(self._call(mock_request), (f"{REPOSITORY}/forks", [("pagelen", "1")]))

    def test_stars_are_watchers(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 30})
        self.assertEqual(self.service.fetch_stargazer_count("atlassian", "python-bitbucket"), 30)
        self.assertEqual(self._call(mock_request)[0], f"{REPOSITORY}/watchers")

    def test_issue_count_with_state_query(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 4})
        self.assertEqual(self.service.fetch_issue_count("atlassian", "python-bitbucket", "on hold"), 4)
        url, params = self._call(mock_request)
        self.assertEqual(url, f"{REPOSITORY}/issues")
        self.assertEqual(params, [("pagelen", "1"), ("q", 'state="on hold"')])

    def test_pull_request_count_single_state(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 9})
        self.assertEqual(self.service.fetch_pull_request_count("atlassian", "python-bitbucket", "merged"), 9)
        self.assertEqual(self._call(mock_request)[1], [("pagelen", "1"), ("state", "MERGED")])

    def test_pull_request_count_all_states(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 9})
        self.service.fetch_pull_request_count("atlassian", "python-bitbucket", "")
        self.assertEqual(self._call(mock_request)[1], [
            ("pagelen", "1"),
            ("state", "OPEN"),
            ("state", "MERGED"),
            ("state", "DECLINED"),
            ("state", "SUPERSEDED"),
        ])

    def test_missing_size(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"values": []})
        with self.assertRaises(FetchError) as ctx:
            self.service.fetch_fork_count("atlassian", "python-bitbucket")
        self.assertEqual(ctx.exception.message, "missing size in response")

    def test_handle_open_pull_requests(self, mock_request) -> None:
        mock_request.return_value = fake_response(json_data={"size": 3})
        request = BadgeRequest(
            provider=Provider.BITBUCKET, owner="atlassian", repo="python-bitbucket",
            metric=Metric.PULL_REQUESTS, state="open",
        )
        params = self.service.handle(request)
        self.assertEqual((params.subject, params.status), ("open PRs", "3"))
