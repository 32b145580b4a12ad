"""
Shields.io-style badge renderer.
Generates a two-part pill SVG: [icon subject | status]

Styles:
  - classic  (default) rounded corners with a light gradient
  - flat     square corners, no gradient

Icons are either one of the named octicons below or an image URI
(http://, https://, data:) embedded with <image>.
"""
import re
from html import escape
from typing import Optional, Tuple

from core.errors import RenderError


def esc(value: str) -> str:
    return escape(value, quote=True)


# ── SVG icon paths (16×16 viewbox) ──────────────────────────────────────────

STAR_ICON = (
    "M8 .25a.75.75 0 0 1 .673.418l1.882 3.815 4.21.612a.75.75 0 0 1 .416 1.279"
    "l-3.046 2.97.719 4.192a.751.751 0 0 1-1.088.791L8 12.347l-3.766 1.98a.75.75"
    " 0 0 1-1.088-.79l.72-4.194L.818 6.374a.75.75 0 0 1 .416-1.28l4.21-.611L7.327"
    ".668A.75.75 0 0 1 8 .25Z"
)
DOWNLOAD_ICON = (
    "M2.75 14A1.75 1.75 0 0 1 1 12.25v-2.5a.75.75 0 0 1 1.5 0v2.5c0 .138.112"
    ".25.25.25h10.5a.25.25 0 0 0 .25-.25v-2.5a.75.75 0 0 1 1.5 0v2.5A1.75 1.75"
    " 0 0 1 13.25 14ZM7.25 7.689V2a.75.75 0 0 1 1.5 0v5.689l1.97-1.969a.749.749"
    " 0 1 1 1.06 1.06l-3.25 3.25a.749.749 0 0 1-1.06 0L4.22 6.78a.749.749 0 1 1"
    " 1.06-1.06l1.97 1.969Z"
)
FOLLOWERS_ICON = (
    "M2 5.5a3.5 3.5 0 1 1 5.898 2.549 5.508 5.508 0 0 1 3.034 4.084.75.75 0 1 1"
    "-1.482.235 4.001 4.001 0 0 0-6.9 0 .75.75 0 0 1-1.482-.236A5.507 5.507 0 0 1"
    " 4.102 8.05 3.493 3.493 0 0 1 2 5.5ZM11 4a3.001 3.001 0 0 1 2.22 5.018 5.01"
    " 5.01 0 0 1 2.56 3.012.749.749 0 0 1-.885.954.752.752 0 0 1-.549-.514 3.507"
    " 3.507 0 0 0-2.522-2.372.75.75 0 0 1-.574-.73v-.352a.75.75 0 0 1 .416-.672"
    "A1.5 1.5 0 0 0 11 4Zm-5.5-.5a2 2 0 1 0-.001 3.999A2 2 0 0 0 5.5 3.5Z"
)
EYE_ICON = (
    "M8 2c1.981 0 3.671.992 4.933 2.078 1.27 1.091 2.187 2.345 2.637 3.023a1.62"
    " 1.62 0 0 1 0 1.798c-.45.678-1.367 1.932-2.637 3.023C11.671 13.008 9.981 14"
    " 8 14c-1.981 0-3.671-.992-4.933-2.078C1.797 10.831.88 9.577.43 8.899a1.62"
    " 1.62 0 0 1 0-1.798c.45-.678 1.367-1.932 2.637-3.023C4.329 2.992 6.019 2 8"
    " 2ZM1.679 7.932a.12.12 0 0 0 0 .136c.411.622 1.241 1.75 2.366 2.717C5.176"
    " 11.758 6.527 12.5 8 12.5c1.473 0 2.825-.742 3.955-1.715 1.124-.967 1.954"
    "-2.096 2.366-2.717a.12.12 0 0 0 0-.136c-.412-.621-1.242-1.75-2.366-2.717C10"
    ".824 4.242 9.473 3.5 8 3.5c-1.473 0-2.824.742-3.955 1.715-1.124.967-1.954"
    " 2.096-2.366 2.717ZM8 10a2 2 0 1 1-.001-3.999A2 2 0 0 1 8 10Z"
)
WORKFLOW_ICON = (
    "M0 1.75C0 .784.784 0 1.75 0h12.5C15.216 0 16 .784 16 1.75v12.5A1.75 1.75"
    " 0 0 1 14.25 16H1.75A1.75 1.75 0 0 1 0 14.25Zm1.75-.25a.25.25 0 0 0-.25"
    ".25v12.5c0 .138.112.25.25.25h12.5a.25.25 0 0 0 .25-.25V1.75a.25.25 0 0 0"
    "-.25-.25Zm9.22 3.72a.749.749 0 0 1 0 1.06L7.28 9.97a.749.749 0 0 1-1.06 0"
    "L4.47 8.22a.749.749 0 1 1 1.06-1.06l1.22 1.22 3.16-3.16a.749.749 0 0 1"
    " 1.06 0Z"
)
LICENSE_ICON = (
    "M8.75.75V2h.985c.304 0 .603.08.867.231l1.29.736c.038.022.08.033.124.033h2.234"
    "a.75.75 0 0 1 0 1.5h-.427l2.111 4.692a.75.75 0 0 1-.154.838l-.53-.53.529.531"
    "-.001.002-.002.002-.006.006-.006.005-.01.01a3.2 3.2 0 0 1-.106.086 2 2 0 0 1"
    "-.395.199c-.406.158-.936.24-1.558.24-.622 0-1.152-.082-1.558-.24a2 2 0 0 1-.395"
    "-.2 3 3 0 0 1-.106-.085l-.01-.01-.006-.005-.005-.006-.002-.002-.001-.002-.53.53"
    ".53-.53a.75.75 0 0 1-.154-.838L13.823 4.5h-.427a.6.6 0 0 1-.187-.03l-7.209"
    " 7.21-.53-.53a.75.75 0 0 1-1.06 0l-.53.53-.001-.002-.002-.002-.006-.006-.006"
    "-.005-.01-.01a2 2 0 0 1-.106-.086 2 2 0 0 1-.395-.199c-.406-.158-.936-.24-1.558"
    "-.24-.622 0-1.152.082-1.558.24a2 2 0 0 1-.395.2 3 3 0 0 1-.106.085l-.01.01"
    "-.006.005-.005.006-.002.002-.001.002L.22 10.94a.75.75 0 0 1-.154-.838L2.178"
    " 5.5h-.427a.75.75 0 0 1 0-1.5h2.234a.25.25 0 0 0 .124-.033l1.29-.736A1.75"
    " 1.75 0 0 1 6.265 3H7.25V.75a.75.75 0 0 1 1.5 0Z"
)

ICONS = {
    "star":     STAR_ICON,
    "download": DOWNLOAD_ICON,
    "people":   FOLLOWERS_ICON,
    "eye":      EYE_ICON,
    "workflow": WORKFLOW_ICON,
    "law":      LICENSE_ICON,
}
IMAGE_PREFIXES = ("http://", "https://", "data:")

STYLES = ("classic", "flat")
DEFAULT_STYLE = "classic"
DEFAULT_COLOR = "#08C"
LABEL_COLOR = "#555"

HEX_COLOR = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")

FONT_FAMILY = "Verdana,Geneva,DejaVu Sans,sans-serif"
FONT_SIZE = 11
HEIGHT = 20
ICON_W = 14
ICON_PAD = 5
PAD = 6


def _text_width(text: str, font_size: float = FONT_SIZE) -> float:
    """Rough character-width estimate for sans-serif at given size."""
    return len(text) * font_size * 0.56


def resolve_color(color: str) -> str:
    """Empty -> default blue; bare hex gets a '#'; anything else is a CSS color."""
    if not color:
        return DEFAULT_COLOR
    if HEX_COLOR.fullmatch(color):
        return f"#{color}"
    return color


def resolve_style(style: str) -> str:
    if not style:
        return DEFAULT_STYLE
    if style not in STYLES:
        raise RenderError(f"invalid style: {style!r}")
    return style


def resolve_icon(icon: str) -> Optional[Tuple[str, str]]:
    """Return ("path", d) for a named icon, ("image", href) for a URI, or None."""
    if not icon:
        return None
    if icon in ICONS:
        return "path", ICONS[icon]
    if icon.startswith(IMAGE_PREFIXES):
        return "image", icon
    raise RenderError(f"unknown icon: {icon!r}")


def _icon_svg(kind: str, value: str, y: float) -> str:
    if kind == "path":
        return (
            f'<g transform="translate({PAD},{y:.1f}) scale(0.875)">'
            f'<path d="{value}" fill="#fff"/>'
            f'</g>'
        )
    return (
        f'<image x="{PAD}" y="{y:.1f}" width="{ICON_W}" height="{ICON_W}" '
        f'href="{esc(value)}"/>'
    )


def _text_svg(x: float, y: float, text: str, anchor: str) -> str:
    # Shadow first, then the text itself
    return (
        f'<text x="{x:.0f}" y="{y + 1:.1f}" fill="#010101" fill-opacity=".3" '
        f'text-anchor="{anchor}">{esc(text)}</text>'
        f'<text x="{x:.0f}" y="{y:.1f}" fill="#fff" '
        f'text-anchor="{anchor}">{esc(text)}</text>'
    )


def generate_badge_svg(
    subject: str,
    status: str,
    color: str = "",
    icon: str = "",
    style: str = "",
) -> str:
    """
    Render a pill badge.

    Raises RenderError for an unknown style or icon. The output depends only
    on the arguments, so identical inputs give byte-identical SVG.
    """
    style = resolve_style(style)
    fill = esc(resolve_color(color))
    icon_ref = resolve_icon(icon)

    h = HEIGHT
    icon_w = ICON_W + ICON_PAD if icon_ref else 0
    label_w = PAD + icon_w + _text_width(subject) + PAD
    value_w = max(PAD + _text_width(status) + PAD, 32)
    total_w = label_w + value_w
    rx = 3 if style == "classic" else 0

    svg = (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{total_w:.0f}" height="{h}" '
        f'role="img" aria-label="{esc(subject)}: {esc(status)}">'
    )
    svg += f'<title>{esc(subject)}: {esc(status)}</title>'

    if style == "classic":
        svg += (
            '<linearGradient id="s" x2="0" y2="100%">'
            '<stop offset="0" stop-color="#bbb" stop-opacity=".1"/>'
            '<stop offset="1" stop-opacity=".1"/>'
            '</linearGradient>'
        )
    svg += f'<mask id="m"><rect width="{total_w:.0f}" height="{h}" rx="{rx}" fill="#fff"/></mask>'

    # Subject half, status half
    svg += '<g mask="url(#m)">'
    svg += f'<rect width="{label_w:.0f}" height="{h}" fill="{LABEL_COLOR}"/>'
    svg += f'<rect x="{label_w:.0f}" width="{value_w:.0f}" height="{h}" fill="{fill}"/>'
    if style == "classic":
        svg += f'<rect width="{total_w:.0f}" height="{h}" fill="url(#s)"/>'
    svg += '</g>'

    if icon_ref:
        svg += _icon_svg(icon_ref[0], icon_ref[1], (h - ICON_W) / 2)

    text_y = h / 2 + FONT_SIZE * 0.36
    svg += f'<g font-family="{FONT_FAMILY}" font-size="{FONT_SIZE}">'
    svg += _text_svg(PAD + icon_w, text_y, subject, "start")
    svg += _text_svg(label_w + value_w / 2, text_y, status, "middle")
    svg += '</g>'

    svg += '</svg>'
    return svg
