"""Shallow structural parser: stylesheet text -> (selector, property, value) entries.

Rules are flat ``selector { declarations }`` spans; nested blocks (``@media``)
are not descended into and end up mis-attributed to the at-rule prelude.
Anything that does not fit the pattern is dropped without complaint.
"""

from __future__ import annotations

import re
from collections import namedtuple
from typing import Callable, Iterator

Rule = namedtuple("Rule", "selector body start end")
Declaration = namedtuple("Declaration", "selector prop value")

# name: value; (the last declaration of a block may omit the semicolon)
PROP_RE = re.compile(r"([-\w]+)\s*:\s*([^;]+)(;|$)")

_BRACE_RE = re.compile(r"[{}]")


def iter_rules(text: str) -> Iterator[Rule]:
    """Yield every ``selector { body }`` span in ``text``.

    Same matches as ``([^{}]+)\\{([^}]*)\\}`` applied left to right, but found
    with a single forward scan so brace-free stretches cannot trigger
    quadratic backtracking. ``selector`` is the raw (untrimmed) prelude.
    """
    pos = 0
    n = len(text)
    while pos < n:
        while pos < n and text[pos] in "{}":
            pos += 1
        if pos >= n:
            return
        brace = _BRACE_RE.search(text, pos)
        if brace is None:
            return
        open_at = brace.start()
        if text[open_at] == "}":
            pos = open_at + 1
            continue
        close_at = text.find("}", open_at + 1)
        if close_at == -1:
            return
        yield Rule(text[pos:open_at], text[open_at + 1:close_at], pos, close_at + 1)
        pos = close_at + 1


def iter_declarations(text: str) -> Iterator[Declaration]:
    """Yield one :class:`Declaration` per ``prop: value;`` inside each rule."""
    for rule in iter_rules(text):
        selector = rule.selector.strip()
        for match in PROP_RE.finditer(rule.body):
            yield Declaration(selector, match.group(1).strip().lower(), match.group(2).strip())


def parse_declarations(text: str) -> list[Declaration]:
    return list(iter_declarations(text))


def rewrite_declarations(text: str, transform: Callable[[str, str], str], rule_context=None) -> str:
    """Rebuild ``text`` with ``transform(prop, value)`` applied to each declaration.

    ``prop`` is lowercased, ``value`` is passed raw (leading whitespace
    stripped by the match, trailing whitespace kept). Matched declarations are
    re-emitted as ``prop: value;`` with the property's original spelling; a
    final declaration that had no semicolon still has none.

    If ``rule_context`` is given it is called with the trimmed selector of
    each rule and its return value is passed as a third argument to
    ``transform``.
    """
    out = []
    last = 0
    for rule in iter_rules(text):
        out.append(text[last:rule.start])
        ctx = rule_context(rule.selector.strip()) if rule_context else None

        def _sub(match, ctx=ctx):
            prop = match.group(1)
            if rule_context:
                value = transform(prop.strip().lower(), match.group(2), ctx)
            else:
                value = transform(prop.strip().lower(), match.group(2))
            return f"{prop}: {value}{match.group(3)}"

        out.append(f"{rule.selector}{{{PROP_RE.sub(_sub, rule.body)}}}")
        last = rule.end
    out.append(text[last:])
    return "".join(out)
