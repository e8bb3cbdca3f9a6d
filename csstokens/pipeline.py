"""One call from stylesheet text to tokens, rewritten CSS and manifest."""

from __future__ import annotations

from dataclasses import dataclass

from csstokens.collect import CandidateTables, collect_candidates
from csstokens.config import TokenizerConfig
from csstokens.emit import build_manifest, render_rewritten_css, render_tokens_css
from csstokens.naming import TokenSet, build_token_set
from csstokens.parser import iter_declarations
from csstokens.rewrite import rewrite_css
from csstokens.roles import ColorRoles, analyze_palette, assign_roles
from csstokens.units import convert_css_units


@dataclass(frozen=True)
class TokenizeResult:
    config: TokenizerConfig
    converted_css: str
    tables: CandidateTables
    roles: ColorRoles
    tokens: TokenSet
    tokens_css: str

    def rewritten_css(self) -> str:
        """Token document followed by the input with literals replaced."""
        rewritten = rewrite_css(self.converted_css, self.tokens, self.config.features)
        return render_rewritten_css(self.tokens_css, rewritten)

    def manifest(self, input_name: str | None = None) -> dict:
        return build_manifest(self.tokens, self.config, input_name)


def tokenize_css(text: str, config: TokenizerConfig | None = None) -> TokenizeResult:
    """Run conversion, parsing, collection, role assignment and naming over ``text``.

    Nothing here raises on malformed CSS; unrecognised input just yields
    fewer (or no) tokens.
    """
    config = config or TokenizerConfig()
    ctx = config.unit_context()

    converted = convert_css_units(text, config.conversions, ctx) if config.conversions else text
    tables = collect_candidates(iter_declarations(converted))
    roles = assign_roles(analyze_palette(tables.colors))
    tokens = build_token_set(tables, roles, config)

    return TokenizeResult(
        config=config,
        converted_css=converted,
        tables=tables,
        roles=roles,
        tokens=tokens,
        tokens_css=render_tokens_css(tokens, config),
    )
