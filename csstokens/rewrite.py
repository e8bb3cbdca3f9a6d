"""Substitute discovered literals in the stylesheet with ``var(--token)`` references."""

from __future__ import annotations

import re

from csstokens.collect import (
    BORDER_PROP_RE,
    FONT_TAIL_RE,
    MOTION_PROPS,
    SPACING_PROP_RE,
    normalize_font_family,
    normalize_radius,
    normalize_shadow,
)
from csstokens.parser import rewrite_declarations


def var(name: str) -> str:
    return f"var({name})"


def _longest_first(mapping: dict) -> list:
    return sorted(mapping.items(), key=lambda item: -len(item[0]))


def replace_everywhere(text: str, mapping: dict) -> str:
    """Plain substring replacement across the whole text, longest literal first."""
    for literal, name in _longest_first(mapping):
        text = text.replace(literal, var(name))
    return text


def replace_tokens(value: str, mapping: dict, flags=re.I) -> str:
    """Replace literals only where they stand as a whole token.

    A literal touching a word character, a hyphen or a dot on either side is
    left alone, so ``1.5`` never matches inside ``15`` or ``11.5`` and ``1em``
    never matches inside ``1emx``.
    """
    for literal, name in _longest_first(mapping):
        pattern = re.compile(r"(?<![\w.-])" + re.escape(literal) + r"(?![\w.%-])", flags)
        value = pattern.sub(lambda m, name=name: var(name), value)
    return value


def _exact(normalize, mapping):
    def transform(value):
        name = mapping.get(normalize(value))
        return var(name) if name else value
    return transform


def rewrite_font_shorthand(value: str, tokens) -> str:
    """Three independent passes over a ``font`` value: weight, size[/lh], family."""
    original = value

    for literal, name in tokens.font_weights.items():
        value = re.sub(r"\b" + re.escape(literal) + r"\b", var(name), value, count=1, flags=re.I)

    for size_literal, size_name in tokens.font_sizes.items():
        pattern = re.compile(
            r"(^|\s)(" + re.escape(size_literal) + r")(?![\w.%-])(\s*/\s*([^\s/;]+))?", re.I
        )

        def _size(m, size_name=size_name):
            out = f"{m.group(1)}{var(size_name)}"
            if m.group(3) and m.group(4):
                lh_name = tokens.line_heights.get(m.group(4))
                out += f" / {var(lh_name)}" if lh_name else f" / {m.group(4)}"
            return out

        value = pattern.sub(_size, value, count=1)

    tail = FONT_TAIL_RE.search(original)
    if tail:
        family_text = tail.group(3).strip()
        family_name = tokens.font_families.get(normalize_font_family(family_text)) if family_text else None
        if family_name:
            at = value.rfind(family_text)
            if at != -1 and not value[at + len(family_text):].strip():
                value = value[:at] + var(family_name) + value[at + len(family_text):]
    return value


def rewrite_css(text: str, tokens, features) -> str:
    """Return ``text`` with every tokenized literal replaced by its variable.

    Exact-match categories (shadows, radii) run before the global color pass
    so a shadow's embedded colors do not spoil its normalized match.
    """
    out = text

    if "shadows" in features and tokens.shadows:
        shadow = _exact(normalize_shadow, tokens.shadows)
        out = rewrite_declarations(out, lambda p, v: shadow(v) if p == "box-shadow" else v)

    if "radius" in features and tokens.radii:
        radius = _exact(normalize_radius, tokens.radii)
        out = rewrite_declarations(out, lambda p, v: radius(v) if p == "border-radius" else v)

    if "colors" in features and tokens.colors:
        out = replace_everywhere(out, tokens.colors)

    if "typography" in features:
        family = _exact(normalize_font_family, tokens.font_families)
        by_prop = {
            "font-size": tokens.font_sizes,
            "line-height": tokens.line_heights,
            "font-weight": tokens.font_weights,
            "letter-spacing": tokens.letter_spacings,
        }

        def _typography(prop, value):
            if prop == "font-family":
                return family(value)
            if prop in by_prop:
                return replace_tokens(value, by_prop[prop])
            if prop == "font":
                return rewrite_font_shorthand(value, tokens)
            return value

        out = rewrite_declarations(out, _typography)

    if "spacing" in features and tokens.spacing:
        out = rewrite_declarations(
            out, lambda p, v: replace_tokens(v, tokens.spacing, 0) if SPACING_PROP_RE.match(p) else v
        )

    if "borders" in features and tokens.border_widths:
        out = rewrite_declarations(
            out, lambda p, v: replace_tokens(v, tokens.border_widths, 0) if BORDER_PROP_RE.match(p) else v
        )

    if "motion" in features and (tokens.durations or tokens.easings):
        def _motion(prop, value):
            if prop not in MOTION_PROPS:
                return value
            value = replace_tokens(value, tokens.durations, 0)
            return replace_tokens(value, tokens.easings, 0)

        out = rewrite_declarations(out, _motion)

    return out
