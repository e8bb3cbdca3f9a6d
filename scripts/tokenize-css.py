#!/usr/bin/env python3
"""Turn a stylesheet's recurring colors, lengths, shadows and timings into CSS custom properties."""

import argparse
import json
import sys
from pathlib import Path

try:
    import requests
except ImportError:
    print("Error: requests is required. Install with: pip install requests")
    sys.exit(1)

try:
    import bs4
except ImportError:
    print("Error: beautifulsoup4 is required. Install with: pip install beautifulsoup4")
    sys.exit(1)

from csstokens.config import (
    DEFAULT_MAX_BYTES,
    DarkAlgorithm,
    TokenizerConfig,
    config_from_dict,
    load_config_file,
)
from csstokens.pipeline import tokenize_css
from csstokens.sources import is_url, read_stylesheet


PREFIX_FLAGS = {
    "space": "--prefix-space",
    "shadow": "--prefix-shadow",
    "duration": "--prefix-duration",
    "ease": "--prefix-ease",
    "ff": "--prefix-font-family",
    "fs": "--prefix-font-size",
    "lh": "--prefix-line-height",
    "ls": "--prefix-letter-spacing",
    "fw": "--prefix-font-weight",
    "border_width": "--prefix-border-width",
    "radius": "--prefix-radius",
    "color": "--prefix-color",
}


def build_parser():
    parser = argparse.ArgumentParser(
        description="Extract design tokens (CSS custom properties) from a stylesheet and optionally rewrite it to use them."
    )
    parser.add_argument("input", help="Path or http(s) URL of the stylesheet (an HTML page URL works too)")
    parser.add_argument("--out", default="tokens.css", help="Output path for the token stylesheet (default: tokens.css)")
    parser.add_argument("--rewrite", help="Also write the input rewritten to reference the tokens")
    parser.add_argument("--manifest", help="Also write a JSON manifest of token name -> literal")
    parser.add_argument(
        "--algorithm", choices=[a.value for a in DarkAlgorithm],
        help="Dark theme color transform (default: flip)"
    )
    parser.add_argument(
        "--features",
        help="Comma-separated subset of colors,spacing,borders,radius,shadows,motion,typography (default: all)"
    )
    parser.add_argument("--convert", help='Unit conversions applied before analysis, e.g. "px>rem,em>px"')
    parser.add_argument("--convert-out", help="Write the unit-converted CSS here (ignored with --rewrite)")
    parser.add_argument("--root-size", dest="root_px", type=float, help="Root font size in px (default: 16)")
    parser.add_argument("--context-size", dest="context_px", type=float, help="Fallback em context in px (default: 16)")
    parser.add_argument("--viewport-width", dest="viewport_width_px", type=float, help="Viewport width in px (default: 100)")
    parser.add_argument("--viewport-height", dest="viewport_height_px", type=float, help="Viewport height in px (default: 100)")
    parser.add_argument("--percent-base", dest="percent_base_px", type=float, help="Base for %% in px (default: 100)")
    parser.add_argument("--ch-width", dest="ch_px", type=float, help="Width of 1ch in px (default: 1)")
    parser.add_argument(
        "--stable-names", action="store_const", const=True, default=None,
        help="Name tokens by a hash of their value instead of by rank"
    )
    parser.add_argument(
        "--prefer-rem", action="store_const", const=True, default=None,
        help="Emit px spacing divisible by 4 as rem in the token stylesheet"
    )
    for key, flag in PREFIX_FLAGS.items():
        parser.add_argument(flag, dest=f"prefix_{key}", help=f"Token name prefix for {key.replace('_', ' ')}")
    parser.add_argument("--config", help="JSON config file; command-line flags take precedence")
    parser.add_argument(
        "--max-bytes", type=int, default=DEFAULT_MAX_BYTES,
        help=f"Refuse inputs larger than this many bytes (default: {DEFAULT_MAX_BYTES})"
    )
    parser.add_argument("--quiet", action="store_true", help="Skip the token summary")
    return parser


def resolve_config(args):
    """Defaults, then the --config file, then explicit flags."""
    config = TokenizerConfig()
    if args.config:
        if not Path(args.config).is_file():
            print(f"Error: Config file not found: {args.config}")
            sys.exit(1)
        try:
            config = config_from_dict(load_config_file(args.config), config)
        except (json.JSONDecodeError, ValueError) as e:
            print(f"Error: Invalid config file {args.config}: {e}")
            sys.exit(1)

    options = {
        "root_px": args.root_px,
        "context_px": args.context_px,
        "viewport_width_px": args.viewport_width_px,
        "viewport_height_px": args.viewport_height_px,
        "percent_base_px": args.percent_base_px,
        "ch_px": args.ch_px,
        "algorithm": args.algorithm,
        "features": args.features,
        "convert": args.convert,
        "stable_names": args.stable_names,
        "prefer_rem": args.prefer_rem,
        "prefixes": {key: getattr(args, f"prefix_{key}") for key in PREFIX_FLAGS},
    }
    return config_from_dict(options, config)


def write_text(path, text):
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    return output_path


def print_summary(result):
    tokens = result.tokens
    print("\n--- Token Summary ---")
    rows = [
        ("Semantic colors", tokens.semantic),
        ("Numbered colors", tokens.numbered),
        ("Font families", tokens.font_families),
        ("Font sizes", tokens.font_sizes),
        ("Line heights", tokens.line_heights),
        ("Font weights", tokens.font_weights),
        ("Letter spacing", tokens.letter_spacings),
        ("Spacing", tokens.spacing),
        ("Border widths", tokens.border_widths),
        ("Radii", tokens.radii),
        ("Shadows", tokens.shadows),
        ("Durations", tokens.durations),
        ("Easing", tokens.easings),
    ]
    for label, mapping in rows:
        if mapping:
            print(f"  {label}: {len(mapping)}")

    if tokens.semantic:
        print("\nColor roles:")
        for literal, name in tokens.semantic.items():
            print(f"  {name}: {literal}")


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = resolve_config(args)

    if not is_url(args.input) and not Path(args.input).is_file():
        print(f"Error: Input file not found: {args.input}")
        sys.exit(1)

    css = read_stylesheet(args.input)
    if css is None:
        print(f"Error: No CSS content could be read from {args.input}")
        sys.exit(1)

    size = len(css.encode("utf-8"))
    if size > args.max_bytes:
        print(f"Error: Input is {size} bytes, above the --max-bytes limit of {args.max_bytes}")
        sys.exit(1)

    print(f"Parsing CSS: {args.input} ({size} bytes)")
    result = tokenize_css(css, config)

    if args.convert_out and config.conversions and not args.rewrite:
        path = write_text(args.convert_out, result.converted_css)
        print(f"Converted CSS > {path}")

    path = write_text(args.out, result.tokens_css)
    print(f"Tokens > {path}")

    if args.rewrite:
        path = write_text(args.rewrite, result.rewritten_css())
        print(f"Rewritten CSS > {path}")

    if args.manifest:
        manifest = result.manifest(args.input)
        path = write_text(args.manifest, json.dumps(manifest, indent=2) + "\n")
        print(f"Manifest > {path}")

    if not args.quiet:
        print_summary(result)
    print("\nDone.")


if __name__ == "__main__":
    main()
