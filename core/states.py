"""
State vocabularies per provider.

Maps the free-form `state` query value onto the filter each provider API
understands plus the subject text shown on the badge:

  normalize(Provider.GITHUB, Metric.ISSUES, "open")  -> ("open", "open issues")
  normalize(Provider.GITLAB, Metric.PULL_REQUESTS, "x") -> ("", "MRs")

An empty filter means "all states"; each fetcher decides how to express that.
"""
from typing import Dict, NamedTuple, Tuple

from core.models import Metric, Provider


class StateTable(NamedTuple):
    default: str
    labels: Dict[str, str]


def _table(noun: str, states) -> StateTable:
    return StateTable(noun, {s: f"{s} {noun}" for s in states})


# ── Per-provider tables ─────────────────────────────────────────────────────

GITHUB_ISSUE_STATES = ("open", "closed")
GITHUB_PR_STATES = ("open", "closed", "merged")

GITLAB_ISSUE_STATES = ("opened", "closed")
GITLAB_MR_STATES = ("opened", "closed", "locked", "merged")

BITBUCKET_ISSUE_STATES = (
    "new", "open", "resolved", "on hold", "invalid", "duplicate", "wontfix", "closed",
)
BITBUCKET_PR_STATES = ("open", "merged", "declined", "superseded")

STATE_TABLES: Dict[Tuple[Provider, Metric], StateTable] = {
    (Provider.GITHUB, Metric.ISSUES):           _table("issues", GITHUB_ISSUE_STATES),
    (Provider.GITHUB, Metric.PULL_REQUESTS):    _table("PRs", GITHUB_PR_STATES),
    (Provider.GITLAB, Metric.ISSUES):           _table("issues", GITLAB_ISSUE_STATES),
    (Provider.GITLAB, Metric.PULL_REQUESTS):    _table("MRs", GITLAB_MR_STATES),
    (Provider.BITBUCKET, Metric.ISSUES):        _table("issues", BITBUCKET_ISSUE_STATES),
    (Provider.BITBUCKET, Metric.PULL_REQUESTS): _table("PRs", BITBUCKET_PR_STATES),
}

# Metrics without a state vocabulary
PLAIN_SUBJECTS = {
    Metric.FORKS: "forks",
    Metric.STARS: "stars",
}


def normalize(provider: Provider, metric: Metric, raw_state: str) -> Tuple[str, str]:
    """Return (provider_filter, subject_label); unknown states yield ("", default)."""
    table = STATE_TABLES.get((provider, metric))
    if table is None:
        return "", PLAIN_SUBJECTS[metric]
    label = table.labels.get(raw_state or "")
    if label is None:
        return "", table.default
    return raw_state, label
