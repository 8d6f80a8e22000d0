# blog/markdown/passes/images.py
"""
Pass that turns both image syntaxes into lazy-loaded figures.

Converts:
    [IMAGE:diagram.webp]              → alt text is the path
    [IMAGE:diagram.webp|Architecture] → explicit alt text
    ![Architecture](diagram.webp)     → standard Markdown

Image syntax inside fenced code blocks is left untouched.
"""

import re
from html import escape

from .utils import map_outside_fences, protect, stands_alone

BRACKET_IMAGE_RE = re.compile(r"\[IMAGE:([^|\]]+)(?:\|([^\]]+))?\]")
MARKDOWN_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")

# "https://...", "data:..." and "mailto:..."; "photo:1.png" stays a filename
_SCHEME_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*://|data:|mailto:)", re.IGNORECASE)

FIGURE_TEMPLATE = """<figure class="article-image">
    <img src="{src}" alt="{alt}" loading="lazy">
</figure>"""


def resolve_image_path(image_path: str, article_id: str, config) -> str:
    """
    Resolve an image reference to the URL used in the page.

    Rules, first match wins:
    1. absolute URLs and site-rooted paths are kept
    2. paths already inside the images directory are kept
    3. a bare filename lives in the article's own image directory
    4. anything else is relative to the image base path
    """
    if _SCHEME_RE.match(image_path) or image_path.startswith("/"):
        return image_path

    if config.images_segment in image_path:
        return image_path

    if article_id and "/" not in image_path and "\\" not in image_path:
        return f"{config.image_base_path}{article_id}/{image_path}"

    return config.image_base_path + image_path.replace("\\", "/")


def render_images(text: str, context: dict) -> str:
    article_id = context["article_id"]
    config = context["config"]

    def figure(match, raw_path, alt):
        clean_path = raw_path.strip()
        src = resolve_image_path(clean_path, article_id, config)
        alt_text = (alt or "").strip() or clean_path
        html = FIGURE_TEMPLATE.format(src=escape(src), alt=escape(alt_text))
        return protect(html, context, block=stands_alone(match))

    def convert(segment):
        segment = BRACKET_IMAGE_RE.sub(
            lambda m: figure(m, m.group(1), m.group(2)), segment
        )
        return MARKDOWN_IMAGE_RE.sub(
            lambda m: figure(m, m.group(2), m.group(1)), segment
        )

    return map_outside_fences(text, convert)
