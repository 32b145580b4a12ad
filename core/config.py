"""
Process configuration, read once at startup.

Lookup order for the GitHub token matches the batch tooling: secrets.json
first (local dev), then the environment (CI / hosting). A `.env` file is
loaded into the environment beforehand when present.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.utils import load_secrets

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.resolve()
SECRETS_PATH = PROJECT_ROOT / "secrets.json"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    github_token: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    upstream_timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _log_level(env: Mapping[str, str]) -> str:
    raw = env.get("LOG_LEVEL")
    if not raw:
        return "INFO"
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Ignoring invalid LOG_LEVEL={raw!r}, using INFO")
        return "INFO"
    return level


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    secrets_path: Path = SECRETS_PATH,
) -> Settings:
    if env is None:
        load_dotenv()
        env = os.environ

    secrets = load_secrets(secrets_path)
    token = secrets.get("GITHUB_TOKEN") or env.get("GITHUB_TOKEN") or ""

    return Settings(
        github_token=token,
        host=env.get("HOST") or DEFAULT_HOST,
        port=_int(env, "PORT", DEFAULT_PORT),
        upstream_timeout=_float(env, "UPSTREAM_TIMEOUT", DEFAULT_TIMEOUT),
        log_level=_log_level(env),
    )
