"""Color model: literal parsing, RGBA/HSL conversion, luminance and dark variants."""

from __future__ import annotations

import math
import re
from collections import namedtuple

from csstokens.config import DarkAlgorithm

RGBA = namedtuple("RGBA", "r g b a")
HSL = namedtuple("HSL", "h s l a")

BLACK = RGBA(0, 0, 0, 1.0)

# Hex (3/4/6/8 digits) or an rgb[a]()/hsl[a]() call with literal arguments.
# Calls with nested functions such as var() or calc() are not colors.
COLOR_RE = re.compile(
    r"#(?:[0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})\b"
    r"|rgba?\(\s*[^()]+\)"
    r"|hsla?\(\s*[^()]+\)"
)

GRAYISH_MAX_SATURATION = 0.10
SATURATED_MIN_SATURATION = 0.22
NEUTRAL_SATURATION = 0.08
DISTINCT_THRESHOLD = 0.18

_LEADING_FLOAT_RE = re.compile(r"\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------

def clamp(value, lo, hi):
    """Limit ``value`` to the range ``lo..hi``."""
    return min(hi, max(lo, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))


def leading_float(text, default: float = 0.0) -> float:
    """Parse the numeric prefix of ``text`` (``"12px"`` -> 12.0)."""
    match = _LEADING_FLOAT_RE.match(str(text))
    return float(match.group(1)) if match else default


def _format_number(value: float, places: int) -> str:
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def extract_colors(value: str) -> list[str]:
    """Every color literal in a declaration value, in source order."""
    return [m.group(0).strip() for m in COLOR_RE.finditer(value)]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _function_args(literal: str) -> list[str]:
    inner = literal[literal.find("(") + 1:]
    if ")" in inner:
        inner = inner[:inner.rfind(")")]
    if "," in inner:
        return [part.strip() for part in inner.split(",")]
    # space separated syntax: rgb(0 0 0 / 50%)
    head, _, alpha = inner.partition("/")
    parts = head.split()
    if alpha.strip():
        parts.append(alpha.strip())
    return parts


def _parse_alpha(text: str | None) -> float:
    """Alpha channel from a number or percentage; missing means opaque."""
    if text is None or not text.strip():
        return 1.0
    value = leading_float(text, 1.0)
    if text.strip().endswith("%"):
        value /= 100
    return clamp(value, 0.0, 1.0)


def parse_hex(literal: str) -> RGBA:
    """Expand a 3/4/6/8 digit hex literal; anything else is black."""
    digits = literal.strip().lstrip("#")
    try:
        if len(digits) in (3, 4):
            r, g, b = (int(ch * 2, 16) for ch in digits[:3])
            a = int(digits[3] * 2, 16) / 255 if len(digits) == 4 else 1.0
            return RGBA(r, g, b, a)
        if len(digits) in (6, 8):
            r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
            a = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
            return RGBA(r, g, b, a)
    except ValueError:
        pass
    return BLACK


def parse_rgb(literal: str) -> RGBA:
    """Parse ``rgb()``/``rgba()``; percentage channels are scaled by 2.55."""
    parts = _function_args(literal)

    def channel(index):
        text = parts[index] if index < len(parts) and parts[index] else "0"
        if text.endswith("%"):
            return round_half_up(leading_float(text) * 2.55)
        return leading_float(text)

    r, g, b = (clamp(channel(i), 0, 255) for i in range(3))
    return RGBA(r, g, b, _parse_alpha(parts[3] if len(parts) > 3 else None))


def parse_hsl(literal: str) -> RGBA:
    """Parse ``hsl()``/``hsla()`` and convert to RGBA."""
    parts = _function_args(literal)

    def fraction(index):
        text = parts[index] if index < len(parts) and parts[index] else "0"
        value = leading_float(text)
        return value / 100 if text.endswith("%") else value

    hue = leading_float(parts[0]) if parts else 0.0
    alpha = _parse_alpha(parts[3] if len(parts) > 3 else None)
    return to_rgba(HSL(hue, fraction(1), fraction(2), alpha))


def parse_color(literal: str) -> RGBA:
    """Parse any supported color literal. Unknown input resolves to opaque black."""
    token = literal.strip().lower()
    if token.startswith("#"):
        return parse_hex(token)
    if token.startswith("rgb"):
        return parse_rgb(token)
    if token.startswith("hsl"):
        return parse_hsl(token)
    return BLACK


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def to_hsl(rgba: RGBA) -> HSL:
    """Convert RGBA (0-255 channels) to HSL with hue in degrees and s/l in 0..1."""
    r, g, b = rgba.r / 255, rgba.g / 255, rgba.b / 255
    high, low = max(r, g, b), min(r, g, b)
    lightness = (high + low) / 2
    delta = high - low
    if delta == 0:
        return HSL(0.0, 0.0, lightness, rgba.a)

    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r:
        hue = (g - b) / delta + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    return HSL(hue * 60, saturation, lightness, rgba.a)


def to_rgba(hsl: HSL) -> RGBA:
    """Standard HSL -> RGB. Hue wraps modulo 360, s/l are clamped to [0, 1]."""
    hue = hsl.h % 360
    saturation = clamp(hsl.s, 0.0, 1.0)
    lightness = clamp(hsl.l, 0.0, 1.0)
    if saturation == 0:
        v = round_half_up(lightness * 255)
        return RGBA(v, v, v, hsl.a)

    if lightness < 0.5:
        q = lightness * (1 + saturation)
    else:
        q = lightness + saturation - lightness * saturation
    p = 2 * lightness - q
    hk = hue / 360

    def component(t):
        t %= 1
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    r, g, b = (round_half_up(component(t) * 255) for t in (hk + 1 / 3, hk, hk - 1 / 3))
    return RGBA(r, g, b, hsl.a)


def relative_luminance(rgba: RGBA) -> float:
    """WCAG 2.0 relative luminance."""

    def linear(channel):
        c = channel / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    return 0.2126 * linear(rgba.r) + 0.7152 * linear(rgba.g) + 0.0722 * linear(rgba.b)


def color_distance(a: HSL, b: HSL) -> float:
    """Euclidean distance over (dh/360, ds, dl). Only used as a distinctness test."""
    dh = abs(a.h - b.h) / 360
    ds = abs(a.s - b.s)
    dl = abs(a.l - b.l)
    return math.sqrt(dh * dh + ds * ds + dl * dl)


def is_distinct(a: HSL, b: HSL) -> bool:
    """True when two colors are far enough apart to hold separate roles."""
    return color_distance(a, b) > DISTINCT_THRESHOLD


def is_grayish(hsl: HSL) -> bool:
    return hsl.s <= GRAYISH_MAX_SATURATION


def is_saturated(hsl: HSL) -> bool:
    return hsl.s >= SATURATED_MIN_SATURATION


# ---------------------------------------------------------------------------
# Dark variants
# ---------------------------------------------------------------------------

def clamp_rgba(rgba: RGBA) -> RGBA:
    """Round channels to integers and clamp every channel into range."""
    return RGBA(
        clamp(round_half_up(rgba.r), 0, 255),
        clamp(round_half_up(rgba.g), 0, 255),
        clamp(round_half_up(rgba.b), 0, 255),
        clamp(rgba.a, 0.0, 1.0),
    )


def _dark_flip(rgba: RGBA) -> RGBA:
    """Mirror lightness; near-neutral colors lose their saturation entirely."""
    hsl = to_hsl(rgba)
    saturation = 0.0 if hsl.s < NEUTRAL_SATURATION else hsl.s
    return clamp_rgba(to_rgba(HSL(hsl.h, saturation, clamp(1 - hsl.l, 0.08, 0.92), hsl.a)))


def _dark_invert(rgba: RGBA) -> RGBA:
    return clamp_rgba(RGBA(
        clamp(255 - rgba.r, 10, 245),
        clamp(255 - rgba.g, 10, 245),
        clamp(255 - rgba.b, 10, 245),
        rgba.a,
    ))


def _dark_tone(rgba: RGBA) -> RGBA:
    hsl = to_hsl(rgba)
    lightness = clamp(1 - hsl.l * 0.9, 0.1, 0.92)
    saturation = clamp(hsl.s * 0.9, 0.0, 1.0)
    return clamp_rgba(to_rgba(HSL(hsl.h, saturation, lightness, hsl.a)))


_DARK_VARIANTS = {
    DarkAlgorithm.FLIP: _dark_flip,
    DarkAlgorithm.INVERT: _dark_invert,
    DarkAlgorithm.TONE: _dark_tone,
}


def to_dark_variant(rgba: RGBA, algorithm: DarkAlgorithm = DarkAlgorithm.FLIP) -> RGBA:
    """Dark-theme counterpart of ``rgba`` using the chosen algorithm."""
    return _DARK_VARIANTS[algorithm](rgba)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def serialize_color(rgba: RGBA) -> str:
    """``#rrggbb`` for opaque colors, ``rgba(r, g, b, a)`` otherwise."""
    r, g, b = (clamp(round_half_up(c), 0, 255) for c in rgba[:3])
    if rgba.a == 1:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"rgba({r}, {g}, {b}, {_format_number(rgba.a, 4)})"
