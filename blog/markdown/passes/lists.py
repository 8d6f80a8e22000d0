# blog/markdown/passes/lists.py
"""
Passes that group consecutive list-item lines into a single list.

A run of matching lines is buffered and flushed as one <ol>/<ul> as soon
as a non-matching line or the end of the buffer is reached. Ordered items
only need to look numbered; the numbers themselves are not kept.
"""

import re

ORDERED_ITEM_RE = re.compile(r"^\d+\.\s+(.+)$")
UNORDERED_ITEM_RE = re.compile(r"^[-*]\s+(.+)$")


def _group_list_runs(text, item_pattern, tag):
    result = []
    items = []

    def flush():
        if items:
            result.append(f"<{tag}>" + "\n".join(items) + f"</{tag}>")
            items.clear()

    for line in text.split("\n"):
        match = item_pattern.match(line)
        if match:
            items.append(f"<li>{match.group(1)}</li>")
            continue
        flush()
        result.append(line)

    flush()
    return "\n".join(result)


def group_ordered_lists(text: str, context: dict) -> str:
    return _group_list_runs(text, ORDERED_ITEM_RE, "ol")


def group_unordered_lists(text: str, context: dict) -> str:
    return _group_list_runs(text, UNORDERED_ITEM_RE, "ul")
