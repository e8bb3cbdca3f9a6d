"""Token naming: per-category ordering and collision-free name generation."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from csstokens.config import NamingMode
from csstokens.roles import ROLE_VARS
from csstokens.units import (
    font_weight_to_number,
    length_to_px,
    length_to_px_strict,
    line_height_to_float,
)


def literal_hash(literal) -> str:
    """First eight hex chars of the MD5 of the literal text."""
    return hashlib.md5(str(literal).encode("utf-8")).hexdigest()[:8]


class NameFactory:
    """Hands out unique ``--prefix-...`` names within one category."""

    def __init__(self, prefix: str, mode: NamingMode = NamingMode.SEQUENTIAL, pad: int = 0, separator: str = "-"):
        self.prefix = prefix
        self.mode = mode
        self.pad = pad
        self.separator = separator
        self.used = set()

    def base_name(self, literal, index: int) -> str:
        if self.mode is NamingMode.STABLE:
            return f"--{self.prefix}-{literal_hash(literal)}"
        return f"--{self.prefix}{self.separator}{str(index + 1).zfill(self.pad)}"

    def __call__(self, literal, index: int) -> str:
        base = self.base_name(literal, index)
        name = base
        n = 2
        while name in self.used:
            name = f"{base}-{n}"
            n += 1
        self.used.add(name)
        return name


def name_literals(ordered, prefix: str, mode: NamingMode = NamingMode.SEQUENTIAL, **factory_kwargs) -> dict:
    """Map each literal (already in emission order) to its token name."""
    factory = NameFactory(prefix, mode, **factory_kwargs)
    return {literal: factory(literal, i) for i, literal in enumerate(ordered)}


# ---------------------------------------------------------------------------
# Category orderings
# ---------------------------------------------------------------------------

def order_by_count_then_size(table: dict, ctx=None) -> list:
    """Spacing, border widths, radii: count desc, then px size desc."""
    return sorted(table, key=lambda lit: (-table[lit].count, -length_to_px(lit, ctx)))


def order_font_lengths(table: dict, ctx=None) -> list:
    """Font sizes and letter spacing: count desc, then px/rem/em size desc."""
    return sorted(table, key=lambda lit: (-table[lit].count, -length_to_px_strict(lit, ctx)))


def order_line_heights(table: dict, ctx=None) -> list:
    return sorted(table, key=lambda lit: (-table[lit].count, -line_height_to_float(lit, ctx)))


def order_font_weights(table: dict) -> list:
    return sorted(table, key=lambda lit: (-table[lit].count, -font_weight_to_number(lit)))


def order_durations(table: dict) -> list:
    return sorted(table, key=lambda lit: (-table[lit].count, table[lit].ms or 0.0))


def order_by_count_then_literal(table: dict) -> list:
    """Shadows, easings, font families."""
    return sorted(table, key=lambda lit: (-table[lit].count, lit))


# ---------------------------------------------------------------------------
# All categories
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TokenSet:
    """literal -> token name, per category, each in emission order.

    ``colors`` merges ``semantic`` (role variables) and ``numbered``.
    Disabled features leave their maps empty.
    """

    semantic: dict = field(default_factory=dict)
    numbered: dict = field(default_factory=dict)
    font_families: dict = field(default_factory=dict)
    font_sizes: dict = field(default_factory=dict)
    line_heights: dict = field(default_factory=dict)
    font_weights: dict = field(default_factory=dict)
    letter_spacings: dict = field(default_factory=dict)
    spacing: dict = field(default_factory=dict)
    border_widths: dict = field(default_factory=dict)
    radii: dict = field(default_factory=dict)
    shadows: dict = field(default_factory=dict)
    durations: dict = field(default_factory=dict)
    easings: dict = field(default_factory=dict)

    @property
    def colors(self) -> dict:
        return {**self.semantic, **self.numbered}


def build_token_set(tables, color_roles, config) -> TokenSet:
    """Name every candidate of every enabled feature."""
    mode = config.naming
    prefixes = config.prefixes
    ctx = config.unit_context()
    maps = {}

    if config.has("colors"):
        semantic = {}
        for role, literal in color_roles.roles.items():
            if literal is not None:
                semantic[literal] = ROLE_VARS[role]
        maps["semantic"] = semantic
        maps["numbered"] = name_literals(color_roles.remaining, prefixes.color, mode, pad=2, separator="")

    if config.has("typography"):
        maps["font_families"] = name_literals(order_by_count_then_literal(tables.font_families), prefixes.ff, mode)
        maps["font_sizes"] = name_literals(order_font_lengths(tables.font_sizes, ctx), prefixes.fs, mode)
        maps["line_heights"] = name_literals(order_line_heights(tables.line_heights, ctx), prefixes.lh, mode)
        maps["font_weights"] = name_literals(order_font_weights(tables.font_weights), prefixes.fw, mode)
        maps["letter_spacings"] = name_literals(order_font_lengths(tables.letter_spacings, ctx), prefixes.ls, mode)

    if config.has("spacing"):
        maps["spacing"] = name_literals(order_by_count_then_size(tables.spacing, ctx), prefixes.space, mode)

    if config.has("borders"):
        maps["border_widths"] = name_literals(
            order_by_count_then_size(tables.border_widths, ctx), prefixes.border_width, mode
        )

    if config.has("radius"):
        maps["radii"] = name_literals(order_by_count_then_size(tables.radii, ctx), prefixes.radius, mode)

    if config.has("shadows"):
        maps["shadows"] = name_literals(order_by_count_then_literal(tables.shadows), prefixes.shadow, mode)

    if config.has("motion"):
        maps["durations"] = name_literals(order_durations(tables.durations), prefixes.duration, mode)
        maps["easings"] = name_literals(order_by_count_then_literal(tables.easings), prefixes.ease, mode)

    return TokenSet(**maps)
