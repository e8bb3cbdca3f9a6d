"""Unit tests for csstokens.naming."""

from csstokens.collect import Candidate, collect_candidates
from csstokens.config import NamingMode, TokenizerConfig, config_from_dict
from csstokens.naming import (
    NameFactory,
    build_token_set,
    literal_hash,
    name_literals,
    order_by_count_then_size,
    order_durations,
    order_font_weights,
    order_line_heights,
)
from csstokens.parser import parse_declarations
from csstokens.roles import analyze_palette, assign_roles


def table(**counts):
    return {lit: Candidate(count=n) for lit, n in counts.items()}


def token_set(css, **options):
    config = config_from_dict(options, TokenizerConfig())
    tables = collect_candidates(parse_declarations(css))
    return build_token_set(tables, assign_roles(analyze_palette(tables.colors)), config)


class TestNameFactory:
    """Tests for sequential and stable name generation."""

    def test_sequential(self):
        assert name_literals(["8px", "16px"], "space") == {"8px": "--space-1", "16px": "--space-2"}

    def test_padded_color_names(self):
        names = name_literals(["#abc", "#def"], "c", pad=2, separator="")
        assert names == {"#abc": "--c01", "#def": "--c02"}

    def test_stable_names_hash_literal(self):
        names = name_literals(["8px"], "space", NamingMode.STABLE)
        assert names == {"8px": f"--space-{literal_hash('8px')}"}
        assert len(literal_hash("8px")) == 8

    def test_stable_names_do_not_depend_on_order(self):
        a = name_literals(["8px", "16px"], "space", NamingMode.STABLE)
        b = name_literals(["16px", "8px"], "space", NamingMode.STABLE)
        assert a == b

    def test_collisions_get_suffixes(self):
        factory = NameFactory("space", NamingMode.STABLE)
        factory.base_name = lambda literal, index: "--space-deadbeef"
        names = [factory(lit, i) for i, lit in enumerate(["a", "b", "c"])]
        assert names == ["--space-deadbeef", "--space-deadbeef-2", "--space-deadbeef-3"]

    def test_names_unique_across_modes(self):
        for mode in NamingMode:
            literals = [f"{n}px" for n in range(50)]
            names = name_literals(literals, "space", mode)
            assert len(set(names.values())) == len(literals)


class TestOrderings:
    """Tests for per-category emission order."""

    def test_count_then_size_desc(self):
        spacing = table(**{"8px": 1, "16px": 1, "4px": 3, "1rem": 1})
        assert order_by_count_then_size(spacing) == ["4px", "16px", "1rem", "8px"]

    def test_line_heights(self):
        assert order_line_heights(table(**{"1.2": 1, "1.5": 1, "normal": 2})) == ["normal", "1.5", "1.2"]

    def test_font_weights(self):
        assert order_font_weights(table(**{"400": 1, "bold": 1, "600": 1})) == ["bold", "600", "400"]

    def test_durations_ascending_time(self):
        durations = {
            "300ms": Candidate(count=1, ms=300.0),
            ".1s": Candidate(count=1, ms=100.0),
            "2s": Candidate(count=2, ms=2000.0),
        }
        assert order_durations(durations) == ["2s", ".1s", "300ms"]


class TestBuildTokenSet:
    """Tests for naming every enabled category."""

    def test_minimal_stylesheet(self, minimal_css):
        tokens = token_set(minimal_css)
        assert tokens.semantic == {
            "#111": "--color-fg",
            "#fff": "--color-bg",
            "#3b82f6": "--color-primary",
        }
        assert tokens.numbered == {}
        assert tokens.spacing == {"16px": "--space-1", "8px": "--space-2"}
        assert tokens.radii == {"4px": "--radius-1"}

    def test_numbered_colors(self):
        tokens = token_set(
            "body{color:#111;background:#fff} a{color:#3b82f6} b{color:#ed247c}"
            " .p{color:#10b981} .r{color:#f59e0b} .s{color:#8b5cf6} .t{color:#0ea5e9}"
        )
        assert set(tokens.numbered.values()) <= {"--c01", "--c02", "--c03", "--c04", "--c05"}
        assert "--c01" in tokens.numbered.values()

    def test_disabled_features_are_empty(self, sample_css):
        tokens = token_set(sample_css, features="colors")
        assert tokens.semantic
        assert tokens.spacing == {}
        assert tokens.font_sizes == {}
        assert tokens.durations == {}

    def test_custom_prefixes(self, minimal_css):
        tokens = token_set(minimal_css, prefixes={"space": "gap", "radius": "round"})
        assert tokens.spacing == {"16px": "--gap-1", "8px": "--gap-2"}
        assert tokens.radii == {"4px": "--round-1"}

    def test_stable_mode(self, minimal_css):
        tokens = token_set(minimal_css, stable_names=True)
        assert tokens.spacing["8px"] == f"--space-{literal_hash('8px')}"
        # semantic role names never change
        assert tokens.semantic["#111"] == "--color-fg"

    def test_colors_merges_semantic_then_numbered(self, sample_css):
        tokens = token_set(sample_css)
        assert list(tokens.colors) == list(tokens.semantic) + list(tokens.numbered)
