"""Tests for scripts/tokenize-css.py."""

import importlib.util
import json
import os

import pytest


# ---------------------------------------------------------------------------
# Import the script module using importlib (handles hyphenated filename)
# ---------------------------------------------------------------------------

def load_script(name):
    """Load a Python script from the scripts/ directory by filename."""
    path = os.path.join(os.path.dirname(__file__), '..', 'scripts', name)
    path = os.path.abspath(path)
    module_name = name.replace('-', '_').replace('.py', '')
    spec = importlib.util.spec_from_file_location(module_name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


cli = load_script('tokenize-css.py')


def run(*argv):
    cli.main([str(a) for a in argv])


# ---------------------------------------------------------------------------
# Output files
# ---------------------------------------------------------------------------

class TestOutputs:
    """Tests for the files the CLI writes."""

    def test_writes_tokens(self, minimal_css_file, tmp_path, capsys):
        out = tmp_path / "tokens.css"
        run(minimal_css_file, "--out", out)
        text = out.read_text(encoding="utf-8")
        assert text.startswith(":root{\n  /* Colors */\n  --color-fg: #111111;")
        output = capsys.readouterr().out
        assert "Parsing CSS:" in output
        assert f"Tokens > {out}" in output
        assert "--- Token Summary ---" in output
        assert output.rstrip().endswith("Done.")

    def test_rewrite_and_manifest(self, minimal_css_file, tmp_path):
        rewrite = tmp_path / "out" / "rewritten.css"
        manifest = tmp_path / "out" / "tokens.json"
        run(minimal_css_file, "--out", tmp_path / "t.css", "--rewrite", rewrite, "--manifest", manifest)
        assert "/* Original CSS with replacements */" in rewrite.read_text(encoding="utf-8")
        data = json.loads(manifest.read_text(encoding="utf-8"))
        assert data["colors"]["semantic"]["--color-primary"] == "#3b82f6"
        assert data["meta"]["input"] == str(minimal_css_file)

    def test_convert_out(self, minimal_css_file, tmp_path):
        converted = tmp_path / "converted.css"
        run(minimal_css_file, "--out", tmp_path / "t.css", "--convert", "px>rem", "--convert-out", converted)
        assert "padding: 0.5rem 1rem" in converted.read_text(encoding="utf-8")

    def test_convert_out_ignored_with_rewrite(self, minimal_css_file, tmp_path):
        converted = tmp_path / "converted.css"
        run(
            minimal_css_file, "--out", tmp_path / "t.css", "--convert", "px>rem",
            "--convert-out", converted, "--rewrite", tmp_path / "r.css",
        )
        assert not converted.exists()

    def test_convert_out_needs_a_conversion(self, minimal_css_file, tmp_path, capsys):
        converted = tmp_path / "converted.css"
        run(minimal_css_file, "--out", tmp_path / "t.css", "--convert-out", converted)
        assert not converted.exists()
        assert "Converted CSS" not in capsys.readouterr().out

    def test_quiet_skips_summary(self, minimal_css_file, tmp_path, capsys):
        run(minimal_css_file, "--out", tmp_path / "t.css", "--quiet")
        assert "Token Summary" not in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Options and config precedence
# ---------------------------------------------------------------------------

class TestOptions:
    """Tests for flag handling and config files."""

    def test_prefix_flags(self, minimal_css_file, tmp_path):
        out = tmp_path / "t.css"
        run(minimal_css_file, "--out", out, "--prefix-space", "gap", "--prefix-radius", "round")
        text = out.read_text(encoding="utf-8")
        assert "--gap-1: 16px;" in text
        assert "--round-1: 4px;" in text

    def test_features_flag(self, minimal_css_file, tmp_path):
        out = tmp_path / "t.css"
        run(minimal_css_file, "--out", out, "--features", "radius")
        text = out.read_text(encoding="utf-8")
        assert "--radius-1" in text
        assert "--color-fg" not in text

    def test_config_file(self, minimal_css_file, tmp_path):
        config = tmp_path / "tokens.json"
        config.write_text(json.dumps({"prefixes": {"space": "sp"}, "algorithm": "invert"}), encoding="utf-8")
        manifest = tmp_path / "m.json"
        run(minimal_css_file, "--out", tmp_path / "t.css", "--config", config, "--manifest", manifest)
        data = json.loads(manifest.read_text(encoding="utf-8"))
        assert "--sp-1" in data["spacing"]
        assert data["meta"]["algorithm"] == "invert"

    def test_flags_override_config_file(self, minimal_css_file, tmp_path):
        config = tmp_path / "tokens.json"
        config.write_text(json.dumps({"algorithm": "invert", "stable_names": False}), encoding="utf-8")
        manifest = tmp_path / "m.json"
        run(
            minimal_css_file, "--out", tmp_path / "t.css", "--config", config,
            "--algorithm", "tone", "--stable-names", "--manifest", manifest,
        )
        meta = json.loads(manifest.read_text(encoding="utf-8"))["meta"]
        assert meta["algorithm"] == "tone"
        assert meta["stableNames"] is True

    def test_bad_algorithm_is_rejected(self, minimal_css_file):
        with pytest.raises(SystemExit):
            run(minimal_css_file, "--algorithm", "sepia")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    """User-fixable problems print an Error line and exit 1."""

    def test_missing_input(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run(tmp_path / "missing.css")
        assert exc.value.code == 1
        assert "Error: Input file not found" in capsys.readouterr().out

    def test_missing_config(self, minimal_css_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run(minimal_css_file, "--config", tmp_path / "nope.json")
        assert exc.value.code == 1
        assert "Error: Config file not found" in capsys.readouterr().out

    def test_invalid_config(self, minimal_css_file, tmp_path, capsys):
        config = tmp_path / "bad.json"
        config.write_text('{"algorithm": "sepia"}', encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            run(minimal_css_file, "--config", config)
        assert exc.value.code == 1
        assert "Error: Invalid config file" in capsys.readouterr().out

    def test_input_too_large(self, minimal_css_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run(minimal_css_file, "--out", tmp_path / "t.css", "--max-bytes", 10)
        assert exc.value.code == 1
        assert "above the --max-bytes limit" in capsys.readouterr().out
        assert not (tmp_path / "t.css").exists()
