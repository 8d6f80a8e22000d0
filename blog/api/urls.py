"""
URL patterns for the editor API.

Endpoints:
- POST /api/v1/preview/ - Render Markdown for the live preview
- POST /api/v1/html-to-markdown/ - Sync rich-text edits back to Markdown
- GET /api/v1/connection/ - Check GitHub access
- GET, POST /api/v1/articles/ - List or create articles
- GET, PUT, DELETE /api/v1/articles/<id>/ - Read, update or delete an article
- POST /api/v1/articles/<id>/images/ - Upload an image for an article
- POST /api/v1/articles/<id>/publish/ - Queue a page build
- GET, PUT, DELETE /api/v1/drafts/<id>/ - Autosaved drafts
"""

from django.urls import path

from .views import (
    article_collection,
    article_detail,
    draft_detail,
    html_to_markdown_view,
    preview,
    publish,
    test_connection,
    upload_image,
)

app_name = "api"

urlpatterns = [
    path("v1/preview/", preview, name="preview"),
    path("v1/html-to-markdown/", html_to_markdown_view, name="html-to-markdown"),
    path("v1/connection/", test_connection, name="connection"),
    path("v1/articles/", article_collection, name="articles"),
    path("v1/articles/<slug:article_id>/", article_detail, name="article"),
    path("v1/articles/<slug:article_id>/images/", upload_image, name="article-images"),
    path("v1/articles/<slug:article_id>/publish/", publish, name="article-publish"),
    path("v1/drafts/<slug:article_id>/", draft_detail, name="draft"),
]
