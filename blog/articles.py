"""
Article metadata and the articles.json catalogue.

The site keeps one JSON index of all articles (``blog/articles.json``) next
to one Markdown file per article (``blog/content/<id>.md``). The catalogue
works against any storage backend, so the same code edits a local checkout
and the GitHub repository.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import date as date_cls
from typing import Any

from .exceptions import ArticleError, ArticleNotFoundError, DuplicateArticleError

logger = logging.getLogger(__name__)

ARTICLES_INDEX = "blog/articles.json"
CONTENT_DIR = "blog/content"
POSTS_DIR = "blog/posts"
IMAGES_DIR = "blog/images"
TEMPLATE_PATH = "blog/post-template.html"

DEFAULT_ICON = "icon-brain.svg"
DEFAULT_READ_TIME = 5
STATUSES = ("draft", "published")

# Catalogue key → Article attribute
_FIELD_KEYS = {
    "id": "id",
    "title": "title",
    "date": "date",
    "tags": "tags",
    "excerpt": "excerpt",
    "contentFile": "content_file",
    "status": "status",
    "readTime": "read_time",
    "icon": "icon",
}


def slugify_title(title: str) -> str:
    """Generate an article id from its title."""
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()


def content_path(article_id: str) -> str:
    return f"{CONTENT_DIR}/{article_id}.md"


def content_file_for(article_id: str, article_date: str) -> str:
    return f"{POSTS_DIR}/{article_date}-{article_id}.html"


def parse_tags(value) -> list[str]:
    """Accept a list or a comma-separated string."""
    if isinstance(value, str):
        value = value.split(",")
    elif value is not None and not isinstance(value, (list, tuple)):
        raise ArticleError("Tags must be a list or a comma-separated string")
    if any(not isinstance(tag, str) for tag in value or []):
        raise ArticleError("Tags must be strings")
    return [tag.strip() for tag in value or [] if tag.strip()]


def parse_read_time(value) -> int:
    try:
        read_time = int(value)
    except (TypeError, ValueError):
        return DEFAULT_READ_TIME
    return read_time or DEFAULT_READ_TIME


@dataclass
class Article:
    id: str
    title: str
    date: str
    tags: list[str] = field(default_factory=list)
    excerpt: str = ""
    content_file: str = ""
    status: str = "draft"
    read_time: int = DEFAULT_READ_TIME
    icon: str = DEFAULT_ICON
    # Keys we do not know about survive a load/save cycle untouched
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.content_file:
            self.content_file = content_file_for(self.id, self.date)

    @classmethod
    def new(
        cls,
        title: str,
        article_id: str | None = None,
        date: str | None = None,
        tags=None,
        excerpt: str = "",
        status: str = "draft",
        read_time=None,
        icon: str | None = None,
    ) -> "Article":
        """Create a new article, filling in the same defaults as the editor."""
        if title is not None and not isinstance(title, str):
            raise ArticleError("Article title must be a string")
        title = (title or "").strip()
        if not title:
            raise ArticleError("Article title is required")

        article = cls(
            id=article_id or slugify_title(title),
            title=title,
            date=date or date_cls.today().isoformat(),
            tags=parse_tags(tags),
            excerpt=excerpt or "",
            status=status or "draft",
            read_time=parse_read_time(read_time),
            icon=icon or DEFAULT_ICON,
        )
        article.validate()
        return article

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        values = {}
        extra = {}
        for key, value in data.items():
            if key in _FIELD_KEYS:
                values[_FIELD_KEYS[key]] = value
            else:
                extra[key] = value

        if not values.get("id") or not values.get("title"):
            raise ArticleError("Article entries need an id and a title")

        values.setdefault("date", date_cls.today().isoformat())
        values["tags"] = parse_tags(values.get("tags"))
        values["read_time"] = parse_read_time(values.get("read_time"))
        return cls(extra=extra, **values)

    def to_dict(self) -> dict:
        data = {key: getattr(self, attr) for key, attr in _FIELD_KEYS.items()}
        data.update(self.extra)
        return data

    def validate(self) -> None:
        for name in ("id", "title", "date", "excerpt", "status", "icon"):
            if not isinstance(getattr(self, name), str):
                raise ArticleError(f"Article {name} must be a string")
        if not self.id or not re.fullmatch(r"[A-Za-z0-9_-]+", self.id):
            raise ArticleError(f'Invalid article id "{self.id}"')
        if self.status not in STATUSES:
            raise ArticleError('Status must be "published" or "draft"')
        try:
            date_cls.fromisoformat(self.date)
        except ValueError:
            raise ArticleError(f'Invalid date "{self.date}", expected YYYY-MM-DD')


def _sort_key(article: Article):
    try:
        return date_cls.fromisoformat(article.date)
    except (TypeError, ValueError):
        return date_cls.min


class ArticleCatalogue:
    """
    Create, update and delete articles in a storage backend.

    Every write goes through the backend with a commit-style message, which
    the GitHub backend uses as the commit message.
    """

    def __init__(self, storage):
        self.storage = storage

    def load(self) -> list[Article]:
        raw = self.storage.read_text(ARTICLES_INDEX)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise ArticleError(f"{ARTICLES_INDEX} is not valid JSON: {exc}") from exc

        entries = data.get("articles", []) if isinstance(data, dict) else None
        if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
            raise ArticleError(f'{ARTICLES_INDEX} must hold {{"articles": [...]}}')
        return [Article.from_dict(entry) for entry in entries]

    def save(self, articles: list[Article], message: str = "Update article list") -> None:
        content = json.dumps(
            {"articles": [article.to_dict() for article in articles]},
            indent=2,
            ensure_ascii=False,
        )
        self.storage.write_text(ARTICLES_INDEX, content + "\n", message=message)

    def all(self) -> list[Article]:
        return self.load()

    def get(self, article_id: str) -> Article:
        for article in self.load():
            if article.id == article_id:
                return article
        raise ArticleNotFoundError(article_id)

    def read_markdown(self, article_id: str) -> str | None:
        return self.storage.read_text(content_path(article_id))

    def write_markdown(self, article_id: str, markdown: str, message: str) -> None:
        self.storage.write_text(content_path(article_id), markdown, message=message)

    def create(self, article: Article, markdown: str) -> Article:
        article.validate()
        articles = self.load()

        if any(existing.id == article.id for existing in articles):
            raise DuplicateArticleError(article.id)

        articles.append(article)
        articles.sort(key=_sort_key, reverse=True)

        self.write_markdown(article.id, markdown, f"Create article: {article.title}")
        self.save(articles, f"Add article: {article.title}")
        logger.info("Created article '%s'", article.id)
        return article

    def update(self, article_id: str, changes: dict, markdown: str | None = None) -> Article:
        if not isinstance(changes, dict):
            raise ArticleError("Article changes must be an object")
        articles = self.load()
        for index, existing in enumerate(articles):
            if existing.id == article_id:
                break
        else:
            raise ArticleNotFoundError(article_id)

        # The id never changes
        merged = {**existing.to_dict(), **changes, "id": article_id}
        if changes.get("date") and "contentFile" not in changes:
            merged["contentFile"] = content_file_for(article_id, changes["date"])
        article = Article.from_dict(merged)
        article.validate()
        articles[index] = article

        message = f"Update article: {article.title}"
        if markdown is not None:
            self.write_markdown(article_id, markdown, message)
        self.save(articles, message)
        logger.info("Updated article '%s'", article_id)
        return article

    def delete(self, article_id: str) -> Article:
        articles = self.load()
        article = next((a for a in articles if a.id == article_id), None)
        if article is None:
            raise ArticleNotFoundError(article_id)

        message = f"Delete article: {article.title}"
        self.storage.delete(content_path(article_id), message=message)

        articles.remove(article)
        self.save(articles, message)
        logger.info("Deleted article '%s'", article_id)
        return article
