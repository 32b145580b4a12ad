"""
HTTP surface for on-demand badge generation.

Routes (GET only):
  /static
  /github/{owner}/{repo}/{forks|issues|pull-requests|stars}
  /gitlab/{owner}/{repo}/{forks|issues|merge-requests|stars}
  /bitbucket/{owner}/{repo}/{forks|issues|pull-requests|stars}

Common params: state, color, status, subject, icon, style
"""
import functools
import logging
from http.server import BaseHTTPRequestHandler
from typing import Dict, List, Mapping, Optional, Tuple
from urllib.parse import parse_qs, unquote, urlsplit

from badges.badge import generate_badge_svg
from core.bitbucket_client import BitbucketService
from core.config import Settings, load_settings
from core.errors import RenderError, UnknownMetricError
from core.github_client import GitHubService
from core.gitlab_client import GitLabService
from core.models import BadgeOverrides, BadgeRequest, Provider
from core.service import RepositoryService, StaticService

logger = logging.getLogger(__name__)

# Browser 1 hour, CDN 1 hour
CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"
SVG_CONTENT_TYPE = "image/svg+xml;utf-8"
REQUEST_TIMEOUT = 10

Services = Dict[Provider, RepositoryService]


def build_services(settings: Settings) -> Services:
    timeout = settings.upstream_timeout
    return {
        Provider.STATIC: StaticService(timeout=timeout),
        Provider.GITHUB: GitHubService(token=settings.github_token, timeout=timeout),
        Provider.GITLAB: GitLabService(timeout=timeout),
        Provider.BITBUCKET: BitbucketService(timeout=timeout),
    }


@functools.lru_cache(maxsize=1)
def default_services() -> Services:
    """Services for hosts that instantiate the handler without our server."""
    return build_services(load_settings())


def _first(query: Mapping[str, List[str]], name: str) -> str:
    return query.get(name, [""])[0]


def parse_overrides(query: Mapping[str, List[str]]) -> BadgeOverrides:
    return BadgeOverrides(
        color=_first(query, "color"),
        status=_first(query, "status"),
        subject=_first(query, "subject"),
        icon=_first(query, "icon"),
        style=_first(query, "style"),
    )


def split_path(path: str) -> List[str]:
    """Split on the raw path, then decode, so '%2F' stays inside its segment."""
    return [unquote(s) for s in path.strip("/").split("/")]


def route(raw_path: str, services: Services) -> Optional[Tuple[RepositoryService, BadgeRequest]]:
    """
    Map a request path (with query string) onto a service and a BadgeRequest.

    Returns None for paths no route matches; raises UnknownMetricError when a
    provider route names a metric that provider does not serve.
    """
    parts = urlsplit(raw_path)
    query = parse_qs(parts.query, keep_blank_values=True)
    overrides = parse_overrides(query)
    segments = split_path(parts.path)

    if segments == ["static"]:
        return services[Provider.STATIC], BadgeRequest(provider=Provider.STATIC, overrides=overrides)

    if len(segments) != 4 or not all(segments):
        return None
    provider_name, owner, repo, request_type = segments
    try:
        provider = Provider(provider_name)
    except ValueError:
        return None
    service = services.get(provider)
    if service is None or provider is Provider.STATIC:
        return None

    request = BadgeRequest(
        provider=provider,
        owner=owner,
        repo=repo,
        metric=service.metric_for(request_type),
        state=_first(query, "state"),
        overrides=overrides,
    )
    return service, request


class handler(BaseHTTPRequestHandler):
    # Per-connection socket timeout (seconds) for reads and writes
    timeout = REQUEST_TIMEOUT
    server_version = "repo-badges/1.0"

    @property
    def services(self) -> Services:
        return getattr(self.server, "services", None) or default_services()

    def do_GET(self):
        self._responded = False
        try:
            self._serve_badge()
        except Exception:
            logger.exception(f"Unhandled error serving {self.path}")
            if self._responded:
                # Status line already on the wire; just drop the connection
                self.close_connection = True
                return
            self._send_text(500, "Internal Server Error")

    def _serve_badge(self) -> None:
        try:
            matched = route(self.path, self.services)
        except UnknownMetricError as e:
            logger.info(str(e))
            self._send_text(404, "404 page not found")
            return
        if matched is None:
            self._send_text(404, "404 page not found")
            return

        service, request = matched
        params = service.handle(request)
        try:
            svg = generate_badge_svg(
                params.subject,
                params.status,
                color=params.color,
                icon=params.icon,
                style=params.style,
            )
        except RenderError as e:
            logger.error(f"Failed to render badge for {self.path}: {e}")
            self._send_text(500, "Internal Server Error")
            return

        body = svg.encode("utf-8")
        self._responded = True
        self.send_response(200)
        self.send_header("Cache-Control", CACHE_CONTROL)
        self.send_header("Content-Type", SVG_CONTENT_TYPE)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _method_not_allowed(self):
        self._send_text(405, "Method Not Allowed")

    do_POST = do_PUT = do_PATCH = do_DELETE = do_HEAD = do_OPTIONS = _method_not_allowed

    def _send_text(self, code: int, message: str) -> None:
        body = f"{message}\n".encode("utf-8")
        self._responded = True
        self.send_response(code)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("X-Content-Type-Options", "nosniff")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)
