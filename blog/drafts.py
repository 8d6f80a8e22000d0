"""
Autosaved editor drafts.

The editor saves the form state on every change so a reload does not lose
unsaved work. Drafts are short-lived and live in the Django cache, one key
per article.
"""

import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

DRAFT_FIELDS = (
    "id",
    "title",
    "markdown",
    "date",
    "tags",
    "excerpt",
    "readTime",
    "status",
    "icon",
)


def _draft_key(article_id):
    return f"article_draft:{article_id}"


def save_draft(article_id, data):
    """Store the editor state for an article, keeping only known fields."""
    draft = {key: data[key] for key in DRAFT_FIELDS if key in data}
    draft["id"] = article_id
    timeout = getattr(settings, "BLOG_DRAFT_TIMEOUT", 7 * 24 * 60 * 60)
    cache.set(_draft_key(article_id), draft, timeout)
    logger.debug("Saved draft for '%s'", article_id)
    return draft


def load_draft(article_id):
    return cache.get(_draft_key(article_id))


def discard_draft(article_id):
    cache.delete(_draft_key(article_id))
