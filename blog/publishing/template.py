# blog/publishing/template.py
"""
Stamp article metadata and rendered content into the static page shell.

The shell (``blog/post-template.html``) is a complete HTML page with empty
slots for the article: meta tags read by the site scripts, the visible
header (title, date, read time, tags), the body container and the SEO tags.
Missing slots are skipped so older templates keep building.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date as date_cls

from bs4 import BeautifulSoup

from blog.articles import DEFAULT_ICON

logger = logging.getLogger(__name__)

# Genitive month names, as the site is written in Russian
MONTHS_GENITIVE = [
    "января",
    "февраля",
    "марта",
    "апреля",
    "мая",
    "июня",
    "июля",
    "августа",
    "сентября",
    "октября",
    "ноября",
    "декабря",
]

READ_TIME_LABEL = "мин чтения"


@dataclass(frozen=True)
class SiteConfig:
    url: str = "https://yourmoontg.github.io"
    name: str = "Moon"
    default_icon: str = DEFAULT_ICON


def get_site_config() -> SiteConfig:
    from django.conf import settings

    options = getattr(settings, "BLOG_SITE", {}) or {}
    known = SiteConfig.__dataclass_fields__.keys()
    return SiteConfig(**{k: v for k, v in options.items() if k in known})


def format_article_date(value: str) -> str:
    """Format an ISO date as "5 января 2025"."""
    try:
        parsed = date_cls.fromisoformat(value[:10])
    except (TypeError, ValueError):
        logger.warning("Cannot format article date %r", value)
        return value or ""
    return f"{parsed.day} {MONTHS_GENITIVE[parsed.month - 1]} {parsed.year}"


def _set_meta(soup, content, **attrs):
    tag = soup.find("meta", attrs=attrs)
    if tag is not None:
        tag["content"] = content


def _set_text(tag, text, element_id=None):
    if tag is None:
        return
    tag.clear()
    tag.string = text
    if element_id:
        tag["id"] = element_id


def _update_seo_tags(soup, article, site: SiteConfig) -> None:
    base_url = site.url.rstrip("/")
    article_url = f"{base_url}/{article.content_file}"
    description = article.excerpt or article.title
    page_title = f"{article.title} - {site.name}"
    icon_url = f"{base_url}/assets/icons/{article.icon or site.default_icon}"

    _set_meta(soup, description, name="description")
    if article.tags:
        _set_meta(soup, ", ".join(article.tags), name="keywords")

    canonical = soup.find("link", rel="canonical")
    if canonical is not None:
        canonical["href"] = article_url

    # Open Graph
    _set_meta(soup, article_url, property="og:url")
    _set_meta(soup, page_title, property="og:title")
    _set_meta(soup, description, property="og:description")
    _set_meta(soup, icon_url, property="og:image")

    # Twitter cards
    _set_meta(soup, article_url, name="twitter:url")
    _set_meta(soup, page_title, name="twitter:title")
    _set_meta(soup, description, name="twitter:description")
    _set_meta(soup, icon_url, name="twitter:image")


def stamp_template(template_html: str, article, body_html: str, site: SiteConfig | None = None) -> str:
    """
    Return the page shell filled in for one article.

    Args:
        template_html: Contents of the page shell
        article: Article whose metadata fills the slots
        body_html: Rendered Markdown for the article body
        site: Site URL and name, read from settings when omitted
    """
    site = site or get_site_config()
    soup = BeautifulSoup(template_html, "html.parser")

    _set_meta(soup, article.id, name="article-id")
    _set_meta(soup, article.date, name="article-date")
    _set_meta(soup, ",".join(article.tags), name="article-tags")
    _set_meta(soup, str(article.read_time), name="article-read-time")

    _set_text(soup.find("title"), f"{article.title} - {site.name}")
    _set_text(
        soup.find("h1", class_="article-title-main"), article.title, "article-title"
    )
    _set_text(
        soup.find("span", class_="article-date-header"),
        format_article_date(article.date),
        "article-date",
    )
    _set_text(
        soup.find("span", class_="article-read-time-header"),
        f"{article.read_time} {READ_TIME_LABEL}",
        "article-read-time",
    )

    tags_container = soup.find("div", class_="article-tags-header")
    if tags_container is not None:
        tags_container.clear()
        tags_container["id"] = "article-tags"
        for tag_name in article.tags:
            tag = soup.new_tag("span", attrs={"class": "article-tag"})
            tag.string = tag_name
            tags_container.append(tag)

    body = soup.find("div", id="article-body")
    if body is None:
        logger.warning("Template has no #article-body container")
    else:
        body.clear()
        body.append(BeautifulSoup(f"\n{body_html}\n", "html.parser"))

    _update_seo_tags(soup, article, site)
    return str(soup)
