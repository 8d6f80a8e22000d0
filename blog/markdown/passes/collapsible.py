# blog/markdown/passes/collapsible.py
"""
Pass that renders collapsible sections.

Converts:
    >>> Section title
    Any **Markdown**, converted on its own
    <<<

into an expandable container. A start marker without a matching end marker
is left alone and ends up in a paragraph as plain text.
"""

import re

from .inline import apply_inline
from .utils import FENCE_RE, protect

COLLAPSIBLE_RE = re.compile(r">>>\s*([^\n]+?)\n(.*?)<<<", re.DOTALL)

# Whichever starts first wins, so markers shown inside fenced code stay literal
_FENCE_OR_COLLAPSIBLE_RE = re.compile(
    f"{FENCE_RE.pattern}|{COLLAPSIBLE_RE.pattern}", re.DOTALL
)

COLLAPSIBLE_TEMPLATE = """<div class="article-collapsible">
    <div class="collapsible-header">
        <h3>{title}</h3>
        <span class="collapsible-icon"></span>
    </div>
    <div class="collapsible-content">
        <div class="collapsible-content-inner">
            {body}
        </div>
    </div>
</div>"""


def render_collapsibles(text: str, context: dict) -> str:
    converter = context["converter"]
    config = context["config"]

    # Bodies lose the article id unless configured otherwise, so bare image
    # filenames inside a collapsible resolve against the image base path.
    nested_article_id = context["article_id"] if config.collapsible_inherits_article_id else ""

    def replace_collapsible(match):
        if match.group(0).startswith("```"):
            return match.group(0)
        title = apply_inline(match.group(3).strip(), context)
        body = converter.convert(match.group(4).strip(), nested_article_id)
        fragment = COLLAPSIBLE_TEMPLATE.format(title=title, body=body)
        return "\n" + protect(fragment, context, block=True) + "\n"

    return _FENCE_OR_COLLAPSIBLE_RE.sub(replace_collapsible, text)
