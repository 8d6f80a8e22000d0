# blog/markdown/html_to_markdown.py
"""
Best-effort HTML to Markdown conversion for the rich-text editor.

The editor edits HTML produced by MarkdownConverter and needs to write its
changes back into the Markdown source. This is a basic conversion, not a
general HTML-to-Markdown library:

- headings, paragraphs, bold/italic, links, images, code, lists, block
  quotes and collapsible sections map back to their Markdown tokens
- tables and embedded media have no Markdown form and pass through as raw HTML
- scripts, styles, comments and doctypes are dropped
- any other tag (div, span, section, ...) is unwrapped, keeping its text
"""

import re

from bs4 import (
    BeautifulSoup,
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

_BLANK_RUNS_RE = re.compile(r"\n{3,}")

_HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 3, "h5": 3, "h6": 3}
_DROPPED_TAGS = {"script", "style", "template", "button"}
_RAW_TAGS = {"table", "iframe", "video", "audio", "details", "svg", "hr"}
# Markup that is not document text
_SKIPPED_STRINGS = (Comment, CData, Declaration, Doctype, ProcessingInstruction)


def _render_children(tag) -> str:
    return "".join(_render_node(child) for child in tag.children)


def _render_inline(tag) -> str:
    return _render_children(tag).strip()


def _render_list(tag: Tag, ordered: bool) -> str:
    lines = []
    for number, item in enumerate(tag.find_all("li", recursive=False), start=1):
        marker = f"{number}." if ordered else "-"
        text = " ".join(_render_inline(item).split("\n"))
        lines.append(f"{marker} {text}")
    return "\n".join(lines) + "\n\n"


def _render_blockquote(tag: Tag) -> str:
    lines = [line.strip() for line in _render_children(tag).strip().split("\n")]
    return "\n".join(f"> {line}" for line in lines if line) + "\n\n"


def _render_collapsible(tag: Tag) -> str:
    header = tag.find(class_="collapsible-header")
    title_tag = header.find(["h1", "h2", "h3", "h4", "h5", "h6"]) if header else None
    title = _render_inline(title_tag) if title_tag else ""

    inner = tag.find(class_="collapsible-content-inner") or tag.find(
        class_="collapsible-content"
    )
    body = _render_children(inner).strip() if inner else ""
    return f">>> {title}\n{body}\n<<<\n\n"


def _render_image(tag: Tag) -> str:
    src = tag.get("src", "")
    if not src:
        return ""
    return f"![{tag.get('alt', '')}]({src})"


def _render_node(node) -> str:
    if isinstance(node, _SKIPPED_STRINGS):
        return ""

    if isinstance(node, NavigableString):
        return str(node)

    if not isinstance(node, Tag):
        return ""

    name = node.name

    if name in _DROPPED_TAGS:
        return ""

    if name in _RAW_TAGS:
        return f"{node}\n\n"

    if name in _HEADING_LEVELS:
        return f"{'#' * _HEADING_LEVELS[name]} {_render_inline(node)}\n\n"

    if name == "p":
        return f"{_render_inline(node)}\n\n"

    if name in ("strong", "b"):
        return f"**{_render_inline(node)}**"

    if name in ("em", "i"):
        return f"*{_render_inline(node)}*"

    if name == "a":
        text = _render_inline(node)
        href = node.get("href")
        return f"[{text}]({href})" if href else text

    if name == "img":
        return _render_image(node)

    if name == "figure":
        image = node.find("img")
        return f"{_render_image(image)}\n\n" if image else _render_children(node)

    if name == "pre":
        code = node.get_text().strip("\n")
        return f"```\n{code}\n```\n\n"

    if name == "code":
        return f"`{node.get_text()}`"

    if name == "ul":
        return _render_list(node, ordered=False)

    if name == "ol":
        return _render_list(node, ordered=True)

    if name == "blockquote":
        return _render_blockquote(node)

    if name == "br":
        return "\n"

    if name == "div" and "article-collapsible" in (node.get("class") or []):
        return _render_collapsible(node)

    return _render_children(node)


def html_to_markdown(html: str) -> str:
    """
    Convert editor HTML back to the Markdown dialect.

    Runs of three or more newlines collapse to a single blank line.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    markdown = _render_children(soup)
    markdown = _BLANK_RUNS_RE.sub("\n\n", markdown)
    return markdown.strip()
