# blog/markdown/passes/blocks.py
"""
Pass for line-level block constructs: fenced code, headings and quotes.

Fenced code runs first. Its body is escaped once and parked behind a
placeholder, so headings, quotes and every inline rule leave it alone.
"""

import re

from .utils import FENCE_RE, escape_html, protect

HEADING_RE = re.compile(r"^(#{1,3}) (.*)$", re.MULTILINE)
BLOCKQUOTE_RE = re.compile(r"^> (.*)$", re.MULTILINE)


def render_fenced_code(text: str, context: dict) -> str:
    def replace_fence(match):
        # The language tag is accepted but not used
        code = escape_html(match.group(2).strip())
        html = f"<pre><code>{code}</code></pre>"
        return "\n" + protect(html, context, block=True) + "\n"

    return FENCE_RE.sub(replace_fence, text)


def render_headings(text: str, context: dict) -> str:
    def replace_heading(match):
        level = len(match.group(1))
        return f"<h{level}>{match.group(2)}</h{level}>"

    return HEADING_RE.sub(replace_heading, text)


def render_blockquotes(text: str, context: dict) -> str:
    # One <blockquote> per quoted line; consecutive lines are not merged.
    return BLOCKQUOTE_RE.sub(r"<blockquote>\1</blockquote>", text)


def render_blocks(text: str, context: dict) -> str:
    text = render_fenced_code(text, context)
    text = render_headings(text, context)
    return render_blockquotes(text, context)
