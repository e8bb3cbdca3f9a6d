"""Heuristic assignment of color literals to semantic roles.

Each role has a pure scorer ``(literal, stats) -> float``. Roles are filled
in a fixed order; a literal picked for one role is removed from every later
pool, so no literal ever holds two roles. Whatever is left becomes the
numbered palette.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

from csstokens.colors import (
    is_distinct,
    is_grayish,
    is_saturated,
    parse_color,
    relative_luminance,
    to_hsl,
)


class Role(Enum):
    FOREGROUND = "foreground"
    BACKGROUND = "background"
    PRIMARY = "primary"
    SECONDARY = "secondary"
    ACCENT = "accent"
    BORDER = "border"
    SURFACE_1 = "surface-1"
    SURFACE_2 = "surface-2"
    OUTLINE = "outline"
    MUTED = "muted"
    DISABLED = "disabled"


ROLE_VARS = {
    Role.FOREGROUND: "--color-fg",
    Role.BACKGROUND: "--color-bg",
    Role.PRIMARY: "--color-primary",
    Role.SECONDARY: "--color-secondary",
    Role.ACCENT: "--color-accent",
    Role.BORDER: "--color-border",
    Role.SURFACE_1: "--color-surface-1",
    Role.SURFACE_2: "--color-surface-2",
    Role.OUTLINE: "--color-outline",
    Role.MUTED: "--color-muted",
    Role.DISABLED: "--color-disabled",
}

BODY_SELECTOR_RE = re.compile(r"\bbody\b")
INTERACTIVE_SELECTOR_RE = re.compile(r"\ba\b|button|\.button|:hover", re.I)
FOCUS_SELECTOR_RE = re.compile(r"focus|:focus|skip-link|screen-reader")
DISABLED_SELECTOR_RE = re.compile(r"disabled")


# ---------------------------------------------------------------------------
# Palette statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorInfo:
    literal: str
    count: int
    props: frozenset
    selectors: tuple
    rgba: tuple
    hsl: tuple
    luminance: float


class PaletteStats:
    """Derived color data for every candidate, in discovery order."""

    def __init__(self, colors: dict):
        self.info = {}
        for literal, node in colors.items():
            rgba = parse_color(literal)
            self.info[literal] = ColorInfo(
                literal=literal,
                count=node.count,
                props=frozenset(node.props),
                selectors=tuple(node.selectors),
                rgba=rgba,
                hsl=to_hsl(rgba),
                luminance=relative_luminance(rgba),
            )

    @property
    def palette(self) -> list[str]:
        return list(self.info)

    def __getitem__(self, literal) -> ColorInfo:
        return self.info[literal]

    def lum(self, literal):
        return self.info[literal].luminance

    def sat(self, literal):
        return self.info[literal].hsl.s

    def freq(self, literal):
        return math.log1p(self.info[literal].count)

    def used_in(self, literal, *props):
        return any(p in self.info[literal].props for p in props)

    def selector_matches(self, literal, pattern):
        return any(pattern.search(s) for s in self.info[literal].selectors)

    def grayish(self, literal):
        return is_grayish(self.info[literal].hsl)

    def saturated(self, literal):
        return is_saturated(self.info[literal].hsl)

    def distinct(self, literal, other):
        if other is None:
            return True
        return is_distinct(self.info[literal].hsl, self.info[other].hsl)


def analyze_palette(colors: dict) -> PaletteStats:
    """Build the per-color statistics the role scorers read."""
    return PaletteStats(colors)


# ---------------------------------------------------------------------------
# Scorers
# ---------------------------------------------------------------------------

def score_foreground(c, stats):
    """Dark, frequent text colors, preferably used by ``color`` on body."""
    s = (1 - stats.lum(c)) * 2.0
    s += stats.freq(c) * 0.4
    if stats.used_in(c, "color"):
        s += 1.0
    if stats.selector_matches(c, BODY_SELECTOR_RE):
        s += 2.0
    return s


def score_foreground_fallback(c, stats):
    """Darkest frequent color when no grayish candidate is left."""
    return 1 - stats.lum(c) + stats.freq(c) * 0.3


def score_background(c, stats):
    """Light, frequent page backgrounds."""
    s = stats.lum(c) * 2.0
    s += stats.freq(c) * 0.3
    if stats.used_in(c, "background", "background-color"):
        s += 0.7
    if stats.selector_matches(c, BODY_SELECTOR_RE):
        s += 2.0
    return s


def score_primary(c, stats):
    """Saturated colors used on links, buttons and hover states."""
    s = stats.sat(c) * 2.0
    s += stats.freq(c) * 0.4
    if stats.selector_matches(c, INTERACTIVE_SELECTOR_RE):
        s += 1.5
    if stats.used_in(c, "color", "background", "border", "border-color"):
        s += 0.7
    lum = stats.lum(c)
    s += 0.3 if 0.2 < lum < 0.9 else -0.2
    return s


def score_secondary(c, stats):
    return stats.sat(c) + stats.freq(c) * 0.3


def score_accent(c, stats):
    return stats.sat(c) + stats.freq(c) * 0.25


def score_border(c, stats):
    """Light grays near luminance 0.88, used on borders."""
    s = (1 - abs(stats.lum(c) - 0.88)) * 1.5
    if stats.used_in(c, "border", "border-color"):
        s += 1.0
    s += stats.freq(c) * 0.2
    return s


def score_surface_1(c, stats):
    """Off-white backgrounds near luminance 0.96."""
    s = (1 - abs(stats.lum(c) - 0.96)) * 1.4
    if stats.used_in(c, "background", "background-color"):
        s += 0.6
    s += stats.freq(c) * 0.2
    return s


def score_surface_2(c, stats):
    """Slightly darker surfaces near luminance 0.9."""
    s = (1 - abs(stats.lum(c) - 0.9)) * 1.2
    if stats.used_in(c, "background", "background-color"):
        s += 0.5
    s += stats.freq(c) * 0.2
    return s


def score_outline(c, stats):
    """Colors used by ``outline`` or in focus and skip-link rules."""
    s = 0.0
    if stats.used_in(c, "outline"):
        s += 2.0
    if stats.selector_matches(c, FOCUS_SELECTOR_RE):
        s += 1.0
    if stats.grayish(c):
        s += 0.3
    s -= abs(stats.lum(c) - 0.75)
    return s


def score_muted(c, stats):
    """Mid-luminance grays for secondary text."""
    return 1 - abs(stats.lum(c) - 0.5) + stats.freq(c) * 0.1


def score_disabled(c, stats):
    """Colors from disabled-state selectors."""
    s = 0.0
    if stats.selector_matches(c, DISABLED_SELECTOR_RE):
        s += 1.5
    s += 1 - abs(stats.lum(c) - 0.6)
    return s


def pick_best(candidates, scorer, stats):
    """Highest score wins; equal scores keep palette order."""
    if not candidates:
        return None
    # max() keeps the first of several equal maxima
    return max(candidates, key=lambda c: scorer(c, stats))


# ---------------------------------------------------------------------------
# Assignment
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorRoles:
    """Role assignments plus the numbered remainder, both literal-keyed."""

    roles: dict
    remaining: list

    def literal_for(self, role: Role):
        return self.roles.get(role)

    @property
    def assigned(self) -> dict:
        """``{literal: role_var}`` for every role that found a color."""
        return {lit: ROLE_VARS[role] for role, lit in self.roles.items() if lit is not None}


def assign_roles(stats: PaletteStats) -> ColorRoles:
    palette = stats.palette
    used = set()
    roles = {}

    def available(predicate=None):
        return [c for c in palette if c not in used and (predicate is None or predicate(c))]

    def claim(role, literal):
        roles[role] = literal
        if literal is not None:
            used.add(literal)
        return literal

    claim(
        Role.FOREGROUND,
        pick_best(available(stats.grayish), score_foreground, stats)
        or pick_best(available(), score_foreground_fallback, stats),
    )
    claim(Role.BACKGROUND, pick_best(available(), score_background, stats))
    primary = claim(Role.PRIMARY, pick_best(available(stats.saturated), score_primary, stats))
    secondary = claim(
        Role.SECONDARY,
        pick_best(
            available(lambda c: stats.saturated(c) and stats.distinct(c, primary)),
            score_secondary,
            stats,
        ),
    )
    claim(
        Role.ACCENT,
        pick_best(
            available(
                lambda c: stats.saturated(c) and stats.distinct(c, primary) and stats.distinct(c, secondary)
            ),
            score_accent,
            stats,
        ),
    )
    claim(Role.BORDER, pick_best(available(stats.grayish), score_border, stats))
    claim(Role.SURFACE_1, pick_best(available(stats.grayish), score_surface_1, stats))
    claim(Role.SURFACE_2, pick_best(available(stats.grayish), score_surface_2, stats))
    claim(Role.OUTLINE, pick_best(available(), score_outline, stats))
    claim(Role.MUTED, pick_best(available(stats.grayish), score_muted, stats))
    claim(
        Role.DISABLED,
        pick_best(available(stats.grayish), score_disabled, stats)
        or pick_best(available(), score_muted, stats),
    )

    remaining = sorted(
        (c for c in palette if c not in used),
        key=lambda c: (-stats[c].count, c),
    )
    return ColorRoles(roles=roles, remaining=remaining)
