import json
import tempfile
import unittest
from pathlib import Path

from core.config import DEFAULT_PORT, DEFAULT_TIMEOUT, load_settings


class TestLoadSettings(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.missing = self.tmp / "secrets.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_defaults(self) -> None:
        settings = load_settings(env={}, secrets_path=self.missing)
        self.assertEqual(settings.github_token, "")
        self.assertEqual(settings.port, DEFAULT_PORT)
        self.assertEqual(settings.upstream_timeout, DEFAULT_TIMEOUT)
        self.assertEqual(settings.log_level, "INFO")

    def test_environment_values(self) -> None:
        env = {"GITHUB_TOKEN": "env-token", "PORT": "9000", "UPSTREAM_TIMEOUT": "2.5", "LOG_LEVEL": "debug"}
        settings = load_settings(env=env, secrets_path=self.missing)
        self.assertEqual(settings.github_token, "env-token")
        self.assertEqual(settings.port, 9000)
        self.assertEqual(settings.upstream_timeout, 2.5)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_invalid_port_falls_back(self) -> None:
        settings = load_settings(env={"PORT": "http"}, secrets_path=self.missing)
        self.assertEqual(settings.port, DEFAULT_PORT)

    def test_invalid_log_level_falls_back(self) -> None:
        settings = load_settings(env={"LOG_LEVEL": "verbose"}, secrets_path=self.missing)
        self.assertEqual(settings.log_level, "INFO")

    def test_secrets_file_wins_over_environment(self) -> None:
        secrets = self.tmp / "secrets.json"
        secrets.write_text(json.dumps({"GITHUB_TOKEN": "file-token"}), encoding="utf-8")
        settings = load_settings(env={"GITHUB_TOKEN": "env-token"}, secrets_path=secrets)
        self.assertEqual(settings.github_token, "file-token")

    def test_broken_secrets_file_is_ignored(self) -> None:
        secrets = self.tmp / "secrets.json"
        secrets.write_text("{not json", encoding="utf-8")
        settings = load_settings(env={"GITHUB_TOKEN": "env-token"}, secrets_path=secrets)
        self.assertEqual(settings.github_token, "env-token")
