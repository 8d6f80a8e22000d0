# blog/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from blog.markdown import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value or ""))


@register.simple_tag(takes_context=True)
def markdown_for_article(context, value, article_id=None):
    """Render markdown with bare image names resolved against an article"""
    if article_id is None:
        article = context.get("article")
        article_id = getattr(article, "id", None) or ""
    return mark_safe(render_markdown(value or "", article_id))
