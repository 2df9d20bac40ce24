"""
Placeholder avatars for projects: a palette color picked from a hash of the
name, a contrasting text color and 1-2 initials, rendered as an SVG data URI.
Everything here is a pure function of (name, hidden); nothing is cached.
"""
import math
import re
from urllib.parse import quote

from glfsearch.models.projects import VisualIdentity

PALETTE = [
    "#FF6B6B",  # Red
    "#4ECDC4",  # Teal
    "#45B7D1",  # Blue
    "#FFA07A",  # Light Salmon
    "#98D8C8",  # Mint
    "#F7DC6F",  # Yellow
    "#BB8FCE",  # Purple
    "#85C1E2",  # Sky Blue
    "#F8B88B",  # Peach
    "#A8E6CF",  # Light Green
    "#FFD3B6",  # Apricot
    "#FFAAA5",  # Pink
    "#FF8B94",  # Rose
    "#A8DADC",  # Powder Blue
    "#E9C46A",  # Goldenrod
]

BLACK = "#000000"
WHITE = "#FFFFFF"

_WORD_SEPARATORS = re.compile(r"[\s\-_/]+")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _utf16_units(text: str):
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_name(name: str) -> int:
    """31-multiplier rolling hash, wrapped to signed 32 bits, made non-negative."""
    value = 0
    for unit in _utf16_units(name):
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def hex_to_rgb(color: str):
    rgb = int(color.lstrip("#"), 16)
    return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return "#" + format((r << 16) | (g << 8) | b, "06x")


def get_avatar_color(name: str) -> str:
    return PALETTE[hash_name(name) % len(PALETTE)]


def desaturate_color(color: str) -> str:
    """80% towards the luminance-weighted gray, then 30% towards white."""
    r, g, b = hex_to_rgb(color)
    gray = _round_half_up(0.299 * r + 0.587 * g + 0.114 * b)

    mixed = [_round_half_up(c * 0.2 + gray * 0.8) for c in (r, g, b)]
    lightened = [min(255, _round_half_up(c + (255 - c) * 0.3)) for c in mixed]
    return rgb_to_hex(*lightened)


def _linearize(channel: int) -> float:
    srgb = channel / 255
    if srgb <= 0.03928:
        return srgb / 12.92
    return ((srgb + 0.055) / 1.055) ** 2.4


def get_relative_luminance(color: str) -> float:
    r, g, b = hex_to_rgb(color)
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def get_contrasting_text_color(background: str) -> str:
    return BLACK if get_relative_luminance(background) > 0.5 else WHITE


def get_project_initials(name: str) -> str:
    words = [w for w in _WORD_SEPARATORS.split(name.strip()) if w]
    if not words:
        return "??"
    if len(words) == 1:
        return words[0][:2].upper()
    return (words[0][0] + words[1][0]).upper()


def render_identity(name: str, hidden: bool = False) -> VisualIdentity:
    color = get_avatar_color(name)
    if hidden:
        color = desaturate_color(color)
    return VisualIdentity(
        color=color,
        text_color=get_contrasting_text_color(color),
        initials=get_project_initials(name),
    )


SVG_TEMPLATE = """<svg width="40" height="40" viewBox="0 0 40 40" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <filter id="textShadow" x="-50%" y="-50%" width="200%" height="200%">
      <feDropShadow dx="0" dy="1" stdDeviation="2" flood-opacity="0.4"/>
    </filter>
  </defs>
  <rect width="40" height="40" fill="{background}" rx="6"/>
  <text x="20" y="31" font-family="{font}" font-size="18" font-weight="900"
        fill="none" stroke="{outline}" stroke-width="0.5" text-anchor="middle" opacity="0.3">{initials}</text>
  <text x="20" y="31" font-family="{font}" font-size="18" font-weight="900"
        fill="{text}" text-anchor="middle" filter="url(#textShadow)">{initials}</text>
</svg>"""

FONT_STACK = "-apple-system, BlinkMacSystemFont, SF Pro Text, Helvetica Neue, sans-serif"


def render_avatar_svg(name: str, hidden: bool = False) -> str:
    identity = render_identity(name, hidden)
    initials = identity.initials.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return SVG_TEMPLATE.format(
        background=identity.color,
        font=FONT_STACK,
        outline=BLACK if identity.text_color == WHITE else WHITE,
        text=identity.text_color,
        initials=initials,
    )


def generate_square_avatar(name: str, hidden: bool = False) -> str:
    """Vector avatar as a data URI, usable directly as an <img> source."""
    return "data:image/svg+xml," + quote(render_avatar_svg(name, hidden), safe="!~*'()")
