"""Configuration record for a tokenizer run, plus JSON config file loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from csstokens.units import UnitContext, parse_conversions


# ---------------------------------------------------------------------------
# Closed option sets
# ---------------------------------------------------------------------------

class DarkAlgorithm(Enum):
    """Strategy used to derive the dark-theme variant of a color."""

    FLIP = "flip"
    INVERT = "invert"
    TONE = "tone"


class NamingMode(Enum):
    """How token names are generated within a category."""

    SEQUENTIAL = "sequential"
    STABLE = "stable"


ALL_FEATURES = ("colors", "spacing", "borders", "radius", "shadows", "motion", "typography")

# Hard ceiling on input size; the regex-based declaration matcher is not
# linear on pathological input.
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


def parse_features(value) -> frozenset:
    """Turn ``"all"``, a comma-separated string or a list into a feature set.

    Unknown names are ignored.
    """
    if value is None:
        return frozenset(ALL_FEATURES)
    if isinstance(value, str):
        if value.strip().lower() == "all":
            return frozenset(ALL_FEATURES)
        value = value.split(",")
    names = {str(v).strip().lower() for v in value}
    return frozenset(n for n in names if n in ALL_FEATURES)


# ---------------------------------------------------------------------------
# Config record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Prefixes:
    space: str = "space"
    shadow: str = "shadow"
    duration: str = "duration"
    ease: str = "ease"
    ff: str = "ff"
    fs: str = "fs"
    lh: str = "lh"
    ls: str = "ls"
    fw: str = "fw"
    border_width: str = "border-width"
    radius: str = "radius"
    color: str = "c"


@dataclass(frozen=True)
class TokenizerConfig:
    root_px: float = 16.0
    context_px: float = 16.0
    viewport_width_px: float = 100.0
    viewport_height_px: float = 100.0
    percent_base_px: float = 100.0
    ch_px: float = 1.0
    dark_algorithm: DarkAlgorithm = DarkAlgorithm.FLIP
    features: frozenset = field(default_factory=lambda: frozenset(ALL_FEATURES))
    prefixes: Prefixes = field(default_factory=Prefixes)
    naming: NamingMode = NamingMode.SEQUENTIAL
    conversions: tuple = ()
    prefer_rem: bool = False

    @property
    def stable_names(self) -> bool:
        return self.naming is NamingMode.STABLE

    def has(self, feature: str) -> bool:
        return feature in self.features

    def unit_context(self):
        """Build the unit-conversion context from this config's pixel bases."""
        return UnitContext(
            root_px=self.root_px,
            context_px=self.context_px,
            viewport_width_px=self.viewport_width_px,
            viewport_height_px=self.viewport_height_px,
            percent_base_px=self.percent_base_px,
            ch_px=self.ch_px,
        )


# ---------------------------------------------------------------------------
# JSON config files
# ---------------------------------------------------------------------------

_NUMERIC_KEYS = (
    "root_px",
    "context_px",
    "viewport_width_px",
    "viewport_height_px",
    "percent_base_px",
    "ch_px",
)


def load_config_file(config_path):
    """Load raw tokenizer options from a JSON file.

    Expected format (every key optional):
    {
        "root_px": 16,
        "context_px": 16,
        "algorithm": "flip",
        "features": "colors,spacing" | ["colors", "spacing"] | "all",
        "prefixes": {"space": "sp", "shadow": "elevation"},
        "stable_names": false,
        "convert": "px>rem,rem>em",
        "prefer_rem": false
    }
    """
    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_dict(options: dict, base: TokenizerConfig | None = None) -> TokenizerConfig:
    """Overlay a dict of options onto ``base`` and return a new config.

    Keys with a ``None`` value are skipped so argparse defaults of ``None``
    never clobber values coming from a config file.
    """
    config = base or TokenizerConfig()
    changes = {}

    for key in _NUMERIC_KEYS:
        if options.get(key) is not None:
            changes[key] = float(options[key])

    algorithm = options.get("algorithm", options.get("dark_algorithm"))
    if algorithm is not None:
        changes["dark_algorithm"] = (
            algorithm if isinstance(algorithm, DarkAlgorithm) else DarkAlgorithm(str(algorithm).lower())
        )

    if options.get("features") is not None:
        changes["features"] = parse_features(options["features"])

    prefixes = options.get("prefixes")
    if prefixes:
        known = {k: v for k, v in prefixes.items() if v and k in Prefixes.__dataclass_fields__}
        changes["prefixes"] = replace(config.prefixes, **known)

    if options.get("stable_names") is not None:
        changes["naming"] = NamingMode.STABLE if options["stable_names"] else NamingMode.SEQUENTIAL

    convert = options.get("convert", options.get("conversions"))
    if convert is not None:
        changes["conversions"] = tuple(parse_conversions(convert))

    if options.get("prefer_rem") is not None:
        changes["prefer_rem"] = bool(options["prefer_rem"])

    return replace(config, **changes)


def load_config(config_path) -> TokenizerConfig:
    """Read a JSON config file into a :class:`TokenizerConfig`."""
    return config_from_dict(load_config_file(Path(config_path)))
