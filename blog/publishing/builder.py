# blog/publishing/builder.py
"""
Build static article pages from their Markdown sources.

Used by the build_articles management command against a local checkout and
by the publish task against the GitHub repository.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from blog.articles import POSTS_DIR, TEMPLATE_PATH, ArticleCatalogue, content_path
from blog.exceptions import BlogError, MarkdownNotFoundError, TemplateNotFoundError
from blog.markdown import MarkdownConverter, get_converter_config

from .template import get_site_config, stamp_template

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    built: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


class ArticleBuilder:
    def __init__(self, storage, converter=None, site=None):
        self.storage = storage
        self.catalogue = ArticleCatalogue(storage)
        self.converter = converter or MarkdownConverter(get_converter_config())
        self.site = site or get_site_config()

    def render(self, article, markdown: str, template: str) -> str:
        body_html = self.converter.convert(markdown, article.id)
        return stamp_template(template, article, body_html, self.site)

    def output_path(self, article) -> str:
        return f"{POSTS_DIR}/{PurePosixPath(article.content_file).name}"

    def _load_template(self) -> str:
        template = self.storage.read_text(TEMPLATE_PATH)
        if template is None:
            raise TemplateNotFoundError(TEMPLATE_PATH)
        return template

    def _build(self, article, template: str) -> str:
        markdown = self.catalogue.read_markdown(article.id)
        if markdown is None:
            raise MarkdownNotFoundError(content_path(article.id))

        html = self.render(article, markdown, template)
        path = self.output_path(article)
        self.storage.write_text(path, html, message=f"Publish article: {article.title}")
        logger.info("Built article '%s' to %s", article.id, path)
        return path

    def build(self, article_id: str) -> str:
        """Build one article and return the path of the written page."""
        article = self.catalogue.get(article_id)
        return self._build(article, self._load_template())

    def build_all(self) -> BuildReport:
        """Build every catalogued article, carrying on past failures."""
        template = self._load_template()
        report = BuildReport()

        for article in self.catalogue.all():
            try:
                report.built.append(self._build(article, template))
            except BlogError as exc:
                logger.error("Failed to build '%s': %s", article.id, exc)
                report.failed[article.id] = str(exc)

        return report
