"""Classify and count the literal values found in parsed declarations."""

from __future__ import annotations

import re
from collections import Counter, namedtuple
from dataclasses import dataclass, field

from csstokens.colors import extract_colors
from csstokens.units import duration_to_ms, extract_durations, extract_lengths, first_length

# Property families
SPACING_PROP_RE = re.compile(r"^(margin|padding|gap|column-gap|row-gap)(|-(top|right|bottom|left))$")
BORDER_PROP_RE = re.compile(r"^(border|outline)")
MOTION_PROPS = {
    "transition",
    "transition-duration",
    "transition-timing-function",
    "animation",
    "animation-duration",
    "animation-timing-function",
}

CSS_WIDE_KEYWORDS = {"inherit", "initial", "unset", "revert", "revert-layer"}

# Longest keywords first so ease-in-out is not read as ease.
EASING_RE = re.compile(
    r"(?<![\w-])(?:ease-in-out|ease-in|ease-out|ease|linear|step-start|step-end"
    r"|steps\([^)]*\)|cubic-bezier\([^)]*\))(?![\w-])"
)

FONT_SIZE_PART_RE = re.compile(r"(^|\s)(-?\d*\.?\d+(px|rem|em|%)(?:\s*/\s*[^ \t/;]+)?)", re.I)
FONT_TAIL_RE = re.compile(r"(-?\d*\.?\d+(?:px|rem|em|%))(?:\s*/\s*([^\s/;]+))?(.*)$", re.I | re.S)
FONT_WEIGHT_PART_RE = re.compile(r"\b(100|200|300|400|500|600|700|800|900|normal|bold)\b", re.I)

FontParts = namedtuple("FontParts", "size line_height weight family")


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()


def normalize_font_family(value: str) -> str:
    """Collapse whitespace and put exactly one space after each comma."""
    value = re.sub(r"\s*,\s*", ",", str(value))
    value = re.sub(r"\s+", " ", value).strip()
    return value.replace(",", ", ")


def normalize_radius(value: str) -> str:
    """Collapse whitespace and pad ``/`` with one space on each side."""
    value = re.sub(r"\s*/\s*", " / ", value)
    return collapse_whitespace(value)


def normalize_shadow(value: str) -> str:
    return collapse_whitespace(value)


def is_css_wide_keyword(value: str) -> bool:
    return str(value).strip().lower() in CSS_WIDE_KEYWORDS


def extract_easings(value: str) -> list[str]:
    return EASING_RE.findall(value)


def parse_font_shorthand(value: str) -> FontParts:
    """Lightly pick apart ``font: [style] [weight] <size>[/<lh>] <family>``.

    Size and line-height come from the first length that follows
    whitespace (or starts the value); the family is whatever trails the
    first length anywhere in the value.
    """
    size = line_height = weight = family = None

    size_part = FONT_SIZE_PART_RE.search(value)
    if size_part:
        raw = size_part.group(2)
        head = re.match(r"^([^\s/]+)(?:\s*/\s*([^\s/]+))?", raw)
        if head:
            size = head.group(1)
            line_height = head.group(2)

    tail = FONT_TAIL_RE.search(value)
    if tail:
        family = tail.group(3).strip() or None

    weight_part = FONT_WEIGHT_PART_RE.search(value)
    if weight_part:
        weight = weight_part.group(1)

    return FontParts(size, line_height, weight, family)


# ---------------------------------------------------------------------------
# Candidate records
# ---------------------------------------------------------------------------

@dataclass
class Candidate:
    count: int = 0
    props: Counter = field(default_factory=Counter)
    ms: float | None = None


@dataclass
class ColorCandidate:
    count: int = 0
    props: Counter = field(default_factory=Counter)
    selectors: list = field(default_factory=list)


@dataclass(frozen=True)
class CandidateTables:
    """Per-category literal -> candidate tables; read-only after collection."""

    colors: dict
    spacing: dict
    border_widths: dict
    radii: dict
    shadows: dict
    durations: dict
    easings: dict
    font_families: dict
    font_sizes: dict
    line_heights: dict
    font_weights: dict
    letter_spacings: dict


_CATEGORIES = (
    "spacing",
    "border_widths",
    "radii",
    "shadows",
    "durations",
    "easings",
    "font_families",
    "font_sizes",
    "line_heights",
    "font_weights",
    "letter_spacings",
)


class CandidateBuilder:
    """Mutable accumulator fed one declaration at a time."""

    def __init__(self):
        self.colors = {}
        self.tables = {name: {} for name in _CATEGORIES}

    def _count(self, category, literal, prop=None, ms=None):
        table = self.tables[category]
        node = table.get(literal)
        if node is None:
            node = table[literal] = Candidate(ms=ms)
        node.count += 1
        if prop:
            node.props[prop] += 1
        return node

    def add_color(self, literal, prop, selector):
        node = self.colors.get(literal)
        if node is None:
            node = self.colors[literal] = ColorCandidate()
        node.count += 1
        node.props[prop] += 1
        node.selectors.append(selector)

    def add(self, decl):
        prop, value = decl.prop, decl.value

        for literal in extract_colors(value):
            self.add_color(literal, prop, decl.selector)

        if prop == "font":
            self._add_font_shorthand(value)
        elif prop == "font-family":
            family = normalize_font_family(value)
            if not is_css_wide_keyword(family):
                self._count("font_families", family)
        elif prop == "font-size":
            self._count("font_sizes", value)
        elif prop == "line-height":
            self._count("line_heights", value)
        elif prop == "font-weight":
            self._count("font_weights", value)
        elif prop == "letter-spacing":
            self._count("letter_spacings", value)

        if SPACING_PROP_RE.match(prop):
            for length in extract_lengths(value):
                self._count("spacing", length, prop)

        if BORDER_PROP_RE.match(prop):
            width = first_length(value)
            if width:
                self._count("border_widths", width)

        if prop == "border-radius":
            self._count("radii", normalize_radius(value))

        if prop == "box-shadow":
            self._count("shadows", normalize_shadow(value))

        if prop in MOTION_PROPS:
            for duration in extract_durations(value):
                self._count("durations", duration, ms=duration_to_ms(duration))
            for easing in extract_easings(value):
                self._count("easings", easing)

    def _add_font_shorthand(self, value):
        parts = parse_font_shorthand(value)
        if parts.size:
            self._count("font_sizes", parts.size)
        if parts.line_height:
            self._count("line_heights", parts.line_height)
        if parts.weight:
            self._count("font_weights", parts.weight)
        if parts.family:
            family = normalize_font_family(parts.family)
            if not is_css_wide_keyword(family):
                self._count("font_families", family)

    def build(self) -> CandidateTables:
        return CandidateTables(colors=dict(self.colors), **{k: dict(v) for k, v in self.tables.items()})


def collect_candidates(declarations) -> CandidateTables:
    """Run every declaration through a fresh :class:`CandidateBuilder`."""
    builder = CandidateBuilder()
    for decl in declarations:
        builder.add(decl)
    return builder.build()
