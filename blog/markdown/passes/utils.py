"""
Helpers shared by the conversion passes.

Passes that emit HTML built from user text (code, images, collapsibles)
park the finished fragment in the conversion context and leave a
placeholder in the buffer. Later passes never see the fragment, so they
cannot re-read its characters as Markdown. The last pass swaps the
fragments back in.
"""

from __future__ import annotations

import re
from typing import Callable

_STASH_KEY = "__stash"

# Private-use code points, stripped from the source before any pass runs
BLOCK_OPEN = "\ue000"
BLOCK_CLOSE = "\ue001"
INLINE_OPEN = "\ue002"
INLINE_CLOSE = "\ue003"
SENTINELS = BLOCK_OPEN + BLOCK_CLOSE + INLINE_OPEN + INLINE_CLOSE

_PLACEHOLDER_RE = re.compile(r"[\ue000\ue002](\d+)[\ue001\ue003]")
_BLOCK_PLACEHOLDER_RE = re.compile(r"\ue000\d+\ue001")

FENCE_RE = re.compile(r"```(\w+)?\n(.*?)```", re.DOTALL)

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}
_HTML_ESCAPE_RE = re.compile(r"[&<>\"']")


def escape_html(text: str) -> str:
    return _HTML_ESCAPE_RE.sub(lambda m: _HTML_ESCAPES[m.group(0)], text)


def protect(html: str, context: dict, block: bool = False) -> str:
    """Stash a rendered fragment and return the placeholder standing in for it."""
    stash = context.setdefault(_STASH_KEY, [])
    stash.append(html)
    index = len(stash) - 1
    if block:
        return f"{BLOCK_OPEN}{index}{BLOCK_CLOSE}"
    return f"{INLINE_OPEN}{index}{INLINE_CLOSE}"


def is_block_placeholder(line: str) -> bool:
    return _BLOCK_PLACEHOLDER_RE.fullmatch(line) is not None


def restore_protected(text: str, context: dict) -> str:
    """Replace every placeholder with its stashed fragment."""
    stash = context.get(_STASH_KEY, [])
    # A fragment can hold placeholders of its own (inline code in a
    # collapsible title), so repeat until nothing is left to replace.
    for _ in range(len(stash) + 1):
        text, count = _PLACEHOLDER_RE.subn(lambda m: stash[int(m.group(1))], text)
        if not count:
            break
    return text


def map_outside_fences(text: str, func: Callable[[str], str]) -> str:
    """Apply ``func`` to the parts of ``text`` that are not fenced code."""
    parts = []
    last = 0
    for match in FENCE_RE.finditer(text):
        parts.append(func(text[last:match.start()]))
        parts.append(match.group(0))
        last = match.end()
    parts.append(func(text[last:]))
    return "".join(parts)


def stands_alone(match: re.Match) -> bool:
    """True when the match is the only non-blank content on its line."""
    text = match.string
    line_start = text.rfind("\n", 0, match.start()) + 1
    line_end = text.find("\n", match.end())
    if line_end == -1:
        line_end = len(text)
    return not text[line_start:match.start()].strip() and not text[match.end():line_end].strip()
