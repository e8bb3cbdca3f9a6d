"""Pytest configuration and shared fixtures for the csstokens test suite."""

import pytest


# ---------------------------------------------------------------------------
# Sample CSS fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_css():
    """The smallest stylesheet that fills fg, bg, primary, spacing and radius."""
    return "body{color:#111;background:#fff} a{color:#3b82f6} .btn{padding:8px 16px;border-radius:4px}"


@pytest.fixture
def sample_css():
    """CSS content with colors, typography, spacing, components, shadows and motion."""
    return """\
body {
    font-family: 'Open Sans', sans-serif;
    font-size: 16px;
    font-weight: 400;
    line-height: 1.6;
    color: #333333;
    background-color: #ffffff;
    margin: 0;
    padding: 0;
}

h1 {
    font-family: 'Montserrat', sans-serif;
    font-size: 36px;
    font-weight: 700;
    line-height: 1.2;
    color: #222222;
    margin-bottom: 20px;
}

h2 {
    font-family: 'Montserrat', sans-serif;
    font-size: 28px;
    font-weight: 600;
    line-height: 1.3;
    color: #333333;
    margin-bottom: 16px;
}

.entry-content {
    max-width: 800px;
    margin: 0 auto;
    padding: 20px 32px;
}

.callout {
    font-style: italic;
    border-left: 3px solid #999999;
    padding: 8px 20px;
    margin: 20px 0;
    color: #555555;
}

.card {
    background-color: #f5f5f5;
    border: 1px solid #e0e0e0;
    border-radius: 8px;
    box-shadow: 0 1px 3px rgba(0, 0, 0, 0.12);
    padding: 16px;
}

.cta {
    display: inline-block;
    background-color: #ed247c;
    color: #ffffff;
    padding: 12px 24px;
    border-radius: 4px;
    font-weight: 600;
    transition: background-color 200ms ease-in-out, color 0.2s ease;
}

.cta:hover {
    background-color: #d11e6c;
}

a {
    color: #0066cc;
    transition: color 200ms ease-in-out;
}

a:focus {
    outline: 2px solid #0066cc;
}
"""


@pytest.fixture
def sample_css_empty():
    """Empty CSS content."""
    return ""


@pytest.fixture
def sample_css_malformed():
    """Malformed CSS that should be handled gracefully."""
    return """\
body {
    color: #333;
    font-size: 16px
    /* missing semicolon above */
    background-color: #fff;
}

h1 {
    font-size: 36px;
/* unclosed rule
.broken {
    color: red;
"""


@pytest.fixture
def sample_html_page():
    """HTML page linking one stylesheet and carrying one inline <style> block."""
    return """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>Test Page</title>
    <link rel="stylesheet" href="/css/site.css">
    <link rel="icon" href="/favicon.ico">
    <style>
        .hero { color: #0066cc; padding: 24px; }
    </style>
</head>
<body><h1>Hello</h1></body>
</html>"""


# ---------------------------------------------------------------------------
# Temporary file fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def temp_css_file(tmp_path, sample_css):
    """Write sample CSS to a temp file and return the path."""
    css_file = tmp_path / "style.css"
    css_file.write_text(sample_css, encoding="utf-8")
    return css_file


@pytest.fixture
def minimal_css_file(tmp_path, minimal_css):
    css_file = tmp_path / "minimal.css"
    css_file.write_text(minimal_css, encoding="utf-8")
    return css_file
