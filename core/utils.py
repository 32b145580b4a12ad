import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from core.errors import FetchError

logger = logging.getLogger(__name__)


def load_json_file(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        return None
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load JSON {path}: {e}")
        return None


def load_secrets(secrets_path: Path) -> Dict[str, str]:
    data = load_json_file(secrets_path)
    return data if isinstance(data, dict) else {}


def encode_segment(value: str) -> str:
    """Percent-encode a single URL path segment, slashes included."""
    return quote(value, safe="")


def gitlab_project_path(owner: str, repo: str) -> str:
    """GitLab addresses a project by its URL-encoded `namespace/name`."""
    return f"{encode_segment(owner)}%2F{encode_segment(repo)}"


def parse_total_header(headers: Mapping[str, str], name: str = "X-Total") -> int:
    raw = headers.get(name)
    if raw is None:
        raise FetchError(f"missing {name} header")
    try:
        total = int(raw)
    except ValueError:
        raise FetchError(f"invalid {name} header: {raw!r}")
    if total < 0:
        raise FetchError(f"invalid {name} header: {raw!r}")
    return total


def read_count(data: Any, field: str) -> int:
    """Pull a non-negative integer field out of a decoded JSON object."""
    if not isinstance(data, dict):
        raise FetchError("unexpected response body")
    value = data.get(field)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise FetchError(f"missing {field} in response")
    return value
