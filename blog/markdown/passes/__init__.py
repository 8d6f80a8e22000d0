# blog/markdown/passes/__init__.py

from .blocks import render_blocks
from .collapsible import render_collapsibles
from .images import render_images
from .inline import render_inline
from .lists import group_ordered_lists, group_unordered_lists
from .normalize import normalize_source
from .paragraphs import wrap_paragraphs
from .utils import restore_protected

PASSES = [
    normalize_source,  # Line endings, reserved placeholder characters
    render_collapsibles,  # Bodies are converted recursively, must run first
    render_images,  # [IMAGE:...] and ![alt](path) to figures
    render_blocks,  # Fenced code, headings, block quotes
    render_inline,  # Code spans, links, bold before italic
    group_ordered_lists,
    group_unordered_lists,
    wrap_paragraphs,  # Needs every block-level tag already emitted
    restore_protected,  # Puts shielded fragments back, always last
    # Order matters - they run sequentially
]


def apply_passes(text, context):
    """Apply all passes in order"""
    for conversion_pass in PASSES:
        text = conversion_pass(text, context)
    return text
