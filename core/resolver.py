from typing import Dict

from core.models import BadgeOverrides, MetricResult, ResolvedBadgeParams

# Applied in this order after the computed values; only non-empty values win.
TEXT_OVERRIDES = ("color", "status", "subject")
# Copied as given, empty or not.
PASSTHROUGH_OVERRIDES = ("icon", "style")


def computed_params(subject: str, status: str) -> Dict[str, str]:
    return {"subject": subject, "status": status, "color": "", "icon": "", "style": ""}


def apply_overrides(params: Dict[str, str], overrides: BadgeOverrides) -> ResolvedBadgeParams:
    merged = dict(params)
    for name in TEXT_OVERRIDES:
        value = getattr(overrides, name)
        if value:
            merged[name] = value
    for name in PASSTHROUGH_OVERRIDES:
        merged[name] = getattr(overrides, name)
    return ResolvedBadgeParams(**merged)


def resolve_badge_params(
    subject: str,
    result: MetricResult,
    overrides: BadgeOverrides,
) -> ResolvedBadgeParams:
    """
    Merge computed badge values with query-string overrides.

    Status is the count when the fetch succeeded, else the error message.
    Overrides are applied after that, so an explicit `status` replaces a
    fetch error too.
    """
    status = str(result.count) if result.ok else result.error
    return apply_overrides(computed_params(subject, status), overrides)
