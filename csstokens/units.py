"""Unit conversion engine plus the length/duration/weight helpers used for ordering.

Conversion runs before any analysis: each ``(from, to)`` pair is applied in
order to every length token, so ``px>rem,rem>em`` chains work by re-reading
the token's unit after each step.
"""

from __future__ import annotations

import re
from collections import namedtuple
from dataclasses import dataclass

from csstokens.parser import rewrite_declarations, iter_declarations

SUPPORTED_UNITS = ("px", "rem", "em", "vh", "vw", "%", "ch")

ConversionPair = namedtuple("ConversionPair", "from_unit to_unit")

# A numeric length token. The guards keep it from starting inside an
# identifier or number and from ending inside a longer unit (1emx, 10pxl).
LENGTH_TOKEN_RE = re.compile(r"(?<![\w.-])(-?\d*\.?\d+)(px|rem|em|vh|vw|%|ch)(?![\w%])", re.I)

# Lengths that count as spacing / border-width candidates (no ch).
LENGTH_RE = re.compile(r"(?<![\w.-])-?\d*\.?\d+(?:px|rem|em|%|vh|vw)(?![\w%])")

_TOKEN_FULL_RE = re.compile(r"^(-?\d*\.?\d+)(px|rem|em|vh|vw|%|ch)$", re.I)
_MATH_FN_RE = re.compile(r"\b(calc|min|max|clamp)\(", re.I)

DURATION_RE = re.compile(r"(?<![\w.])-?\d*\.?\d+(?:ms|s)\b")


@dataclass(frozen=True)
class UnitContext:
    """Pixel bases used to resolve relative units."""

    root_px: float = 16.0
    context_px: float = 16.0
    viewport_width_px: float = 100.0
    viewport_height_px: float = 100.0
    percent_base_px: float = 100.0
    ch_px: float = 1.0

    def with_context(self, context_px: float) -> "UnitContext":
        return UnitContext(
            self.root_px,
            context_px,
            self.viewport_width_px,
            self.viewport_height_px,
            self.percent_base_px,
            self.ch_px,
        )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def strip_zero(value: float, places: int = 4) -> str:
    """Format with at most ``places`` decimals and no trailing zeros."""
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_length(value: float, unit: str) -> str:
    """Render a number and unit with trailing zeros stripped."""
    return f"{strip_zero(value)}{unit}"


# ---------------------------------------------------------------------------
# Conversion pairs
# ---------------------------------------------------------------------------

def _make_pair(from_unit, to_unit):
    from_unit = str(from_unit).strip().lower()
    to_unit = str(to_unit).strip().lower()
    if from_unit not in SUPPORTED_UNITS or to_unit not in SUPPORTED_UNITS or from_unit == to_unit:
        return None
    return ConversionPair(from_unit, to_unit)


def parse_conversions(value) -> list[ConversionPair]:
    """Parse ``"px>rem,em>px"`` (or a list of such strings / 2-tuples).

    Pairs naming an unknown unit, or converting a unit to itself, are
    dropped rather than rejected.
    """
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    pairs = []
    for item in items:
        if isinstance(item, str):
            if ">" not in item:
                continue
            from_unit, _, to_unit = item.strip().partition(">")
            pair = _make_pair(from_unit, to_unit)
        elif len(item) == 2:
            pair = _make_pair(*item)
        else:
            pair = None
        if pair:
            pairs.append(pair)
    return pairs


# ---------------------------------------------------------------------------
# Token conversion
# ---------------------------------------------------------------------------

def _to_px(value, unit, ctx):
    """Pixel equivalent of ``value`` in ``unit`` under ``ctx``."""
    if unit == "px":
        return value
    if unit == "rem":
        return value * ctx.root_px
    if unit == "em":
        return value * ctx.context_px
    if unit == "vh":
        return value * ctx.viewport_height_px / 100
    if unit == "vw":
        return value * ctx.viewport_width_px / 100
    if unit == "%":
        return value * ctx.percent_base_px / 100
    return value * ctx.ch_px


def _from_px(px, unit, ctx):
    """Inverse of ``_to_px``."""
    if unit == "px":
        return px
    if unit == "rem":
        return px / ctx.root_px
    if unit == "em":
        return px / ctx.context_px
    if unit == "vh":
        return px / ctx.viewport_height_px * 100
    if unit == "vw":
        return px / ctx.viewport_width_px * 100
    if unit == "%":
        return px / ctx.percent_base_px * 100
    return px / ctx.ch_px


def convert_token(token: str, pair: ConversionPair, ctx: UnitContext | None = None) -> str:
    """Convert one length token if its unit is ``pair.from_unit``.

    Anything else (other unit, unparseable text, zero base) is returned
    unchanged.
    """
    ctx = ctx or UnitContext()
    match = _TOKEN_FULL_RE.match(token.strip())
    if not match or match.group(2).lower() != pair.from_unit:
        return token
    try:
        px = _to_px(float(match.group(1)), pair.from_unit, ctx)
        return format_length(_from_px(px, pair.to_unit, ctx), pair.to_unit)
    except (ValueError, ZeroDivisionError):
        return token


def convert_length(token: str, pairs, ctx: UnitContext | None = None) -> str:
    """Run ``token`` through every pair in order."""
    for pair in pairs:
        token = convert_token(token, pair, ctx)
    return token


def _convert_plain(text, pairs, ctx):
    return LENGTH_TOKEN_RE.sub(lambda m: convert_length(m.group(0), pairs, ctx), text)


def _matching_paren(text, open_at):
    """Index of the parenthesis closing the one at ``open_at``, or -1."""
    depth = 0
    for i in range(open_at, len(text)):
        ch = text[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def convert_value(value: str, pairs, ctx: UnitContext | None = None) -> str:
    """Convert every length token in a declaration value exactly once.

    ``calc()``, ``min()``, ``max()`` and ``clamp()`` are located with a
    parenthesis counter and their arguments converted recursively; names and
    operators are left alone.
    """
    if not pairs:
        return value
    ctx = ctx or UnitContext()
    out = []
    pos = 0
    for fn in _MATH_FN_RE.finditer(value):
        if fn.start() < pos:
            continue
        open_at = fn.end() - 1
        close_at = _matching_paren(value, open_at)
        if close_at == -1:
            break
        out.append(_convert_plain(value[pos:fn.start()], pairs, ctx))
        out.append(value[fn.start():open_at + 1])
        out.append(convert_value(value[open_at + 1:close_at], pairs, ctx))
        out.append(")")
        pos = close_at + 1
    out.append(_convert_plain(value[pos:], pairs, ctx))
    return "".join(out)


# ---------------------------------------------------------------------------
# Stylesheet conversion
# ---------------------------------------------------------------------------

def build_font_size_map(text: str, ctx: UnitContext | None = None) -> dict[str, float]:
    """Map selector -> px for every literal px/rem/em ``font-size`` declaration.

    Same-selector only; nothing is inherited. Later declarations win.
    """
    ctx = ctx or UnitContext()
    sizes = {}
    for decl in iter_declarations(text):
        if decl.prop != "font-size":
            continue
        px = length_to_px_strict(decl.value, ctx)
        if px:
            sizes[decl.selector] = px
    return sizes


def convert_css_units(text: str, pairs, ctx: UnitContext | None = None) -> str:
    """Apply the conversion pipeline to every declaration in ``text``."""
    pairs = list(pairs)
    if not pairs:
        return text
    ctx = ctx or UnitContext()
    font_sizes = build_font_size_map(text, ctx)

    def rule_context(selector):
        return ctx.with_context(font_sizes.get(selector) or ctx.context_px)

    return rewrite_declarations(
        text,
        lambda prop, value, rule_ctx: convert_value(value, pairs, rule_ctx),
        rule_context=rule_context,
    )


# ---------------------------------------------------------------------------
# Ordering helpers (never raise; unparseable -> 0)
# ---------------------------------------------------------------------------

_LENGTH_FULL_RE = re.compile(r"^(-?\d*\.?\d+)(px|rem|em|%|vh|vw)$")
_STRICT_FULL_RE = re.compile(r"^(-?\d*\.?\d+)(px|rem|em)$", re.I)
_UNITLESS_RE = re.compile(r"^(-?\d*\.?\d+)$")
_WEIGHT_RE = re.compile(r"^\d{3}$")


def extract_lengths(value: str) -> list[str]:
    """Every length token in a value, in source order."""
    return LENGTH_RE.findall(value)


def first_length(value: str) -> str | None:
    match = LENGTH_RE.search(value)
    return match.group(0) if match else None


def length_to_px(literal: str, ctx: UnitContext | None = None) -> float:
    """Pixel approximation for sorting; %/vh/vw keep their raw number."""
    ctx = ctx or UnitContext()
    match = _LENGTH_FULL_RE.match(literal.strip())
    if not match:
        return 0.0
    value, unit = float(match.group(1)), match.group(2)
    if unit == "rem":
        return value * ctx.root_px
    if unit == "em":
        return value * ctx.context_px
    return value


def length_to_px_strict(literal: str, ctx: UnitContext | None = None) -> float:
    """px/rem/em only; anything else (unitless, other units, keywords) is 0."""
    ctx = ctx or UnitContext()
    match = _STRICT_FULL_RE.match(str(literal).strip())
    if not match:
        return 0.0
    value, unit = float(match.group(1)), match.group(2).lower()
    if unit == "rem":
        return value * ctx.root_px
    if unit == "em":
        return value * ctx.context_px
    return value


def line_height_to_float(literal: str, ctx: UnitContext | None = None) -> float:
    """Numeric line height for ordering; ``normal`` counts as 1.2."""
    text = str(literal).strip().lower()
    if text == "normal":
        return 1.2
    match = _UNITLESS_RE.match(text)
    if match:
        return float(match.group(1))
    return length_to_px_strict(text, ctx)


def font_weight_to_number(literal: str) -> int:
    """Numeric weight for ordering; keywords map to 400, 700 or 500."""
    text = str(literal).strip().lower()
    if _WEIGHT_RE.match(text):
        return int(text)
    if text == "normal":
        return 400
    if text == "bold":
        return 700
    # only used to order, not to resolve relative weights
    if text in ("lighter", "bolder"):
        return 500
    return 0


def extract_durations(value: str) -> list[str]:
    """Every ``s``/``ms`` token in a value."""
    return DURATION_RE.findall(value)


def duration_to_ms(literal: str) -> float:
    """Milliseconds for a duration literal; unparseable text is 0."""
    text = literal.strip().lower()
    match = re.match(r"^(-?\d*\.?\d+)", text)
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if text.endswith("ms") else value * 1000


def normalize_duration(literal: str) -> str:
    """Express a duration in seconds: ``200ms`` -> ``0.2s``."""
    return f"{strip_zero(duration_to_ms(literal) / 1000, 3)}s"


def prefer_rem(literal: str, ctx: UnitContext | None = None) -> str:
    """Rewrite ``Npx`` as rem when N is a multiple of 4; anything else as is."""
    ctx = ctx or UnitContext()
    match = re.match(r"^(-?\d*\.?\d+)px$", literal)
    if not match:
        return literal
    px = float(match.group(1))
    if px % 4 == 0:
        return format_length(px / ctx.root_px, "rem")
    return literal
