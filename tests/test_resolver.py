import unittest

from pydantic import ValidationError

from core.models import BadgeOverrides, MetricResult
from core.resolver import resolve_badge_params


class TestMetricResult(unittest.TestCase):
    def test_requires_exactly_one_outcome(self) -> None:
        with self.assertRaises(ValidationError):
            MetricResult()
        with self.assertRaises(ValidationError):
            MetricResult(count=1, error="boom")

    def test_rejects_negative_count(self) -> None:
        with self.assertRaises(ValidationError):
            MetricResult(count=-1)


class TestResolveBadgeParams(unittest.TestCase):
    def test_count_becomes_status(self) -> None:
        params = resolve_badge_params("stars", MetricResult(count=42), BadgeOverrides())
        self.assertEqual(params.subject, "stars")
        self.assertEqual(params.status, "42")
        self.assertEqual(params.color, "")
        self.assertEqual(params.icon, "")
        self.assertEqual(params.style, "")

    def test_zero_count_is_a_status(self) -> None:
        params = resolve_badge_params("forks", MetricResult(count=0), BadgeOverrides())
        self.assertEqual(params.status, "0")

    def test_error_message_becomes_status(self) -> None:
        params = resolve_badge_params("issues", MetricResult(error="404 Not Found"), BadgeOverrides())
        self.assertEqual(params.status, "404 Not Found")

    def test_non_empty_overrides_win(self) -> None:
        overrides = BadgeOverrides(color="orange", status="99", subject="my forks")
        params = resolve_badge_params("forks", MetricResult(count=5), overrides)
        self.assertEqual(params.color, "orange")
        self.assertEqual(params.status, "99")
        self.assertEqual(params.subject, "my forks")

    def test_status_override_masks_fetch_error(self) -> None:
        params = resolve_badge_params("stars", MetricResult(error="timed out"), BadgeOverrides(status="n/a"))
        self.assertEqual(params.status, "n/a")

    def test_empty_overrides_do_not_replace(self) -> None:
        overrides = BadgeOverrides(color="", status="", subject="")
        params = resolve_badge_params("stars", MetricResult(count=3), overrides)
        self.assertEqual(params.subject, "stars")
        self.assertEqual(params.status, "3")

    def test_icon_and_style_pass_through(self) -> None:
        overrides = BadgeOverrides(icon="star", style="flat")
        params = resolve_badge_params("stars", MetricResult(count=3), overrides)
        self.assertEqual(params.icon, "star")
        self.assertEqual(params.style, "flat")
