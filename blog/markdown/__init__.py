from .config import ConverterConfig, get_converter_config
from .html_to_markdown import html_to_markdown
from .renderer import MarkdownConverter, render_markdown

__all__ = (
    "ConverterConfig",
    "MarkdownConverter",
    "get_converter_config",
    "html_to_markdown",
    "render_markdown",
)
