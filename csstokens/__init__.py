"""Turn the recurring literals of a stylesheet into named CSS custom properties."""

from csstokens.config import (
    ALL_FEATURES,
    DEFAULT_MAX_BYTES,
    DarkAlgorithm,
    NamingMode,
    Prefixes,
    TokenizerConfig,
    config_from_dict,
    load_config,
)
from csstokens.pipeline import TokenizeResult, tokenize_css

__version__ = "0.1.0"

__all__ = [
    "ALL_FEATURES",
    "DEFAULT_MAX_BYTES",
    "DarkAlgorithm",
    "NamingMode",
    "Prefixes",
    "TokenizerConfig",
    "TokenizeResult",
    "config_from_dict",
    "load_config",
    "tokenize_css",
]
