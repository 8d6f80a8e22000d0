# blog/markdown/renderer.py

from .config import ConverterConfig, get_converter_config
from .passes import apply_passes


class MarkdownConverter:
    """
    Converts the blog's Markdown dialect to an HTML fragment.

    The same converter backs the editor preview, the template tags and the
    publish-time page builds, so a preview always matches the published page.
    Instances hold only their configuration and may be shared freely.
    """

    def __init__(self, config=None):
        self.config = config or ConverterConfig()

    def convert(self, markdown, article_id=""):
        """
        Main rendering function running the pass pipeline.

        Args:
            markdown: Markdown dialect text
            article_id: Article slug used to resolve bare image filenames

        Returns:
            HTML fragment without surrounding whitespace
        """
        context = {
            "article_id": article_id or "",
            "config": self.config,
            "converter": self,
        }
        html = apply_passes(markdown or "", context)
        return html.strip()


def render_markdown(text, article_id="", config=None):
    """Render with the configuration from Django settings unless one is given."""
    if config is None:
        config = get_converter_config()
    return MarkdownConverter(config).convert(text, article_id)
