# blog/markdown/passes/inline.py
"""
Pass for inline formatting: code spans, links, bold and italic.

Order is load-bearing:
- code spans first, escaped and shielded, so nothing inside them is formatted
- links before emphasis, with the opening tag shielded so an asterisk in a
  URL cannot start an emphasis run
- bold before italic, otherwise the single-asterisk rule would eat one half
  of every "**" delimiter
"""

import re
from html import escape

from .utils import escape_html, protect

INLINE_CODE_RE = re.compile(r"`([^`]+)`")
LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
BOLD_RE = re.compile(r"\*\*(.+?)\*\*")
# An opening asterisk followed by whitespace is a list bullet or arithmetic
ITALIC_RE = re.compile(r"\*(?!\s)(.+?)\*")


def apply_inline(text: str, context: dict) -> str:
    text = INLINE_CODE_RE.sub(
        lambda m: protect(f"<code>{escape_html(m.group(1))}</code>", context), text
    )

    def replace_link(match):
        href = escape(match.group(2).strip())
        opening = f'<a href="{href}" target="_blank" rel="noopener noreferrer">'
        return f"{protect(opening, context)}{match.group(1)}</a>"

    text = LINK_RE.sub(replace_link, text)
    text = BOLD_RE.sub(r"<strong>\1</strong>", text)
    return ITALIC_RE.sub(r"<em>\1</em>", text)


def render_inline(text: str, context: dict) -> str:
    return apply_inline(text, context)
