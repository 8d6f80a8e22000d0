# blog/markdown/passes/paragraphs.py

from .utils import is_block_placeholder

# Lines starting with one of these are already block-level HTML
BLOCK_TAG_PREFIXES = (
    "<h",
    "<ul",
    "<ol",
    "<li",
    "<pre",
    "<blockquote",
    "<figure",
    "<div",
)


def wrap_paragraphs(text: str, context: dict) -> str:
    """
    Wrap every remaining run of bare text lines in <p>.

    A run ends at a blank line, a block-level line or the end of the buffer;
    its lines are stripped and joined with a single space.
    """
    result = []
    paragraph = []

    def flush():
        if paragraph:
            result.append(f"<p>{' '.join(paragraph)}</p>")
            paragraph.clear()

    for line in text.split("\n"):
        stripped = line.strip()

        if not stripped:
            flush()
            continue

        if stripped.startswith(BLOCK_TAG_PREFIXES) or is_block_placeholder(stripped):
            flush()
            result.append(stripped)
        else:
            paragraph.append(stripped)

    flush()
    return "\n".join(result)
