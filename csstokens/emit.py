"""Assemble the token stylesheet, the rewritten stylesheet and the JSON manifest."""

from __future__ import annotations

from csstokens.colors import parse_color, serialize_color, to_dark_variant
from csstokens.units import normalize_duration, prefer_rem

DARK_SELECTOR = ':root[data-theme="dark"]'


def _section(lines, title, mapping, render=lambda literal: literal):
    if not mapping:
        return
    lines.append(f"\n  /* {title} */")
    for literal, name in mapping.items():
        lines.append(f"  {name}: {render(literal)};")


def render_token_blocks(tokens, config) -> tuple[list, list]:
    """Declaration lines for the default scope and the dark scope."""
    root, dark = [], []
    ctx = config.unit_context()

    if config.has("colors") and tokens.colors:
        root.append("  /* Colors */")
        dark.append("  /* Colors */")
        for literal, name in tokens.colors.items():
            rgba = parse_color(literal)
            root.append(f"  {name}: {serialize_color(rgba)};")
            dark.append(f"  {name}: {serialize_color(to_dark_variant(rgba, config.dark_algorithm))};")

    if config.has("typography"):
        typography = (
            ("Typography: font families", tokens.font_families),
            ("Typography: font sizes", tokens.font_sizes),
            ("Typography: line heights", tokens.line_heights),
            ("Typography: font weights", tokens.font_weights),
            ("Typography: letter spacing", tokens.letter_spacings),
        )
        for title, mapping in typography:
            _section(root, title, mapping)
        if any(mapping for _, mapping in typography):
            dark.append("\n  /* Typography (same as light) */")
            for _, mapping in typography:
                dark.extend(f"  {name}: {literal};" for literal, name in mapping.items())

    if config.has("spacing"):
        render = (lambda lit: prefer_rem(lit, ctx)) if config.prefer_rem else (lambda lit: lit)
        _section(root, "Spacing (by frequency)", tokens.spacing, render)

    if config.has("borders"):
        _section(root, "Border widths", tokens.border_widths)

    if config.has("radius"):
        _section(root, "Radii", tokens.radii)

    if config.has("shadows"):
        _section(root, "Shadows", tokens.shadows)
        _section(dark, "Shadows (same as light; adjust if needed)", tokens.shadows)

    if config.has("motion"):
        for lines in (root, dark):
            _section(lines, "Durations", tokens.durations, normalize_duration)
            _section(lines, "Easing", tokens.easings)

    return root, dark


def render_tokens_css(tokens, config) -> str:
    root, dark = render_token_blocks(tokens, config)
    root_body = "\n".join(root)
    dark_body = "\n".join(dark)
    return f":root{{\n{root_body}\n}}\n\n{DARK_SELECTOR}{{\n{dark_body}\n}}\n"


def render_rewritten_css(tokens_css: str, rewritten: str) -> str:
    return f"/* Generated tokens */\n{tokens_css}\n/* Original CSS with replacements */\n{rewritten}"


def _inverse(mapping: dict) -> dict:
    return {name: literal for literal, name in mapping.items()}


def build_manifest(tokens, config, input_name: str | None = None) -> dict:
    """Per-category ``{token name: literal}`` maps plus run metadata."""
    typography = {}
    if config.has("typography"):
        typography = {
            "fontFamilies": _inverse(tokens.font_families),
            "fontSizes": _inverse(tokens.font_sizes),
            "lineHeights": _inverse(tokens.line_heights),
            "fontWeights": _inverse(tokens.font_weights),
            "letterSpacing": _inverse(tokens.letter_spacings),
        }
    motion = {}
    if config.has("motion"):
        motion = {"durations": _inverse(tokens.durations), "easing": _inverse(tokens.easings)}

    return {
        "colors": {
            "semantic": _inverse(tokens.semantic),
            "numbered": _inverse(tokens.numbered),
        },
        "typography": typography,
        "spacing": _inverse(tokens.spacing),
        "borderWidths": _inverse(tokens.border_widths),
        "radii": _inverse(tokens.radii),
        "shadows": _inverse(tokens.shadows),
        "motion": motion,
        "meta": {
            "input": input_name,
            "algorithm": config.dark_algorithm.value,
            "features": sorted(config.features),
            "stableNames": config.stable_names,
            "conversions": [f"{p.from_unit}>{p.to_unit}" for p in config.conversions],
        },
    }
