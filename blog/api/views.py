"""
API views for the browser editor.

The editor keeps no state on the server: articles are read from and
written to the GitHub repository on every request, the live preview and the
rich-text sync are pure conversions, and drafts sit in the cache.
"""

import json
import logging
import os

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from blog.articles import Article, ArticleCatalogue
from blog.drafts import discard_draft, load_draft, save_draft
from blog.exceptions import (
    ArticleNotFoundError,
    BlogError,
    DuplicateArticleError,
    GitHubError,
)
from blog.github import GitHubClient
from blog.markdown import get_converter_config, html_to_markdown, render_markdown
from blog.storage import GitHubStorage

from .auth import api_auth_required

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = [".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".avif"]


def get_github_client():
    return GitHubClient.from_settings()


def get_catalogue():
    return ArticleCatalogue(GitHubStorage(get_github_client()))


def _parse_json(request):
    """Return (data, error_response) for a JSON request body."""
    try:
        data = json.loads(request.body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None, JsonResponse({"error": "Invalid JSON"}, status=400)
    if not isinstance(data, dict):
        return None, JsonResponse({"error": "Expected a JSON object"}, status=400)
    return data, None


def _error_response(exc):
    if isinstance(exc, ArticleNotFoundError):
        status = 404
    elif isinstance(exc, DuplicateArticleError):
        status = 409
    elif isinstance(exc, GitHubError):
        logger.error(f"GitHub error: {exc}")
        status = 502
    else:
        status = 400
    return JsonResponse({"error": str(exc)}, status=status)


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def preview(request):
    """
    Render Markdown exactly as the published page will.

    POST /api/v1/preview/

    Request body:
    {
        "markdown": "# Title\\n\\nText",
        "article_id": "my-post"      // optional, resolves bare image names
    }

    Response (200):
    {"html": "<h1>Title</h1>\\n<p>Text</p>"}
    """
    data, error = _parse_json(request)
    if error:
        return error

    markdown = data.get("markdown") or ""
    if not isinstance(markdown, str):
        return JsonResponse({"error": "markdown must be a string"}, status=400)

    html = render_markdown(markdown, str(data.get("article_id") or ""))
    return JsonResponse({"html": html})


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def html_to_markdown_view(request):
    """
    Convert rich-text editor HTML back to Markdown (basic conversion).

    POST /api/v1/html-to-markdown/

    Request body: {"html": "<p><strong>Hi</strong></p>"}
    Response (200): {"markdown": "**Hi**"}
    """
    data, error = _parse_json(request)
    if error:
        return error

    html = data.get("html") or ""
    if not isinstance(html, str):
        return JsonResponse({"error": "html must be a string"}, status=400)

    return JsonResponse({"markdown": html_to_markdown(html)})


@require_http_methods(["GET"])
@api_auth_required
def test_connection(request):
    client = get_github_client()
    try:
        client.test_connection()
    except GitHubError as exc:
        return _error_response(exc)
    return JsonResponse(
        {"connected": True, "repository": f"{client.owner}/{client.repo}"}
    )


@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_auth_required
def article_collection(request):
    """
    GET /api/v1/articles/ - all catalogue entries, newest first

    POST /api/v1/articles/ - create an article

    Request body:
    {
        "article": {"title": "...", "id": "...", "date": "2025-01-05",
                    "tags": ["ai"], "excerpt": "...", "readTime": 5,
                    "status": "draft", "icon": "icon-robot.svg"},
        "markdown": "# ..."
    }
    """
    catalogue = get_catalogue()

    if request.method == "GET":
        try:
            articles = catalogue.all()
        except BlogError as exc:
            return _error_response(exc)
        return JsonResponse({"articles": [a.to_dict() for a in articles]})

    data, error = _parse_json(request)
    if error:
        return error

    fields = data.get("article") or {}
    markdown = data.get("markdown") or ""
    if not isinstance(fields, dict):
        return JsonResponse({"error": "article must be an object"}, status=400)
    if not isinstance(markdown, str):
        return JsonResponse({"error": "markdown must be a string"}, status=400)

    try:
        article = Article.new(
            fields.get("title"),
            article_id=fields.get("id"),
            date=fields.get("date"),
            tags=fields.get("tags"),
            excerpt=fields.get("excerpt", ""),
            status=fields.get("status", "draft"),
            read_time=fields.get("readTime"),
            icon=fields.get("icon"),
        )
        catalogue.create(article, markdown)
    except BlogError as exc:
        return _error_response(exc)

    discard_draft(article.id)
    return JsonResponse({"article": article.to_dict()}, status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_auth_required
def article_detail(request, article_id):
    """
    GET /api/v1/articles/<id>/ - entry plus Markdown source
    PUT /api/v1/articles/<id>/ - {"article": {...changes}, "markdown": "..."}
    DELETE /api/v1/articles/<id>/ - remove the Markdown file and the entry
    """
    catalogue = get_catalogue()

    try:
        if request.method == "GET":
            article = catalogue.get(article_id)
            markdown = catalogue.read_markdown(article_id) or ""
            return JsonResponse({"article": article.to_dict(), "markdown": markdown})

        if request.method == "DELETE":
            catalogue.delete(article_id)
            discard_draft(article_id)
            return JsonResponse({"deleted": article_id})

        data, error = _parse_json(request)
        if error:
            return error

        changes = data.get("article") or {}
        if not isinstance(changes, dict):
            return JsonResponse({"error": "article must be an object"}, status=400)
        markdown = data.get("markdown")
        if markdown is not None and not isinstance(markdown, str):
            return JsonResponse({"error": "markdown must be a string"}, status=400)

        article = catalogue.update(article_id, changes, markdown)
    except BlogError as exc:
        return _error_response(exc)

    discard_draft(article_id)
    return JsonResponse({"article": article.to_dict()})


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def upload_image(request, article_id):
    """
    Upload an image into blog/images/<id>/.

    POST /api/v1/articles/<id>/images/ (multipart, field "file",
    optional field "filename")

    Response (201):
    {
        "path": "blog/images/my-post/diagram.webp",
        "url": "../../blog/images/my-post/diagram.webp",
        "markdown": "![diagram.webp](../../blog/images/my-post/diagram.webp)"
    }
    """
    upload = request.FILES.get("file")
    if upload is None:
        return JsonResponse({"error": "file is required"}, status=400)

    filename = request.POST.get("filename") or upload.name
    ext = os.path.splitext(filename)[1].lower()
    if ext not in IMAGE_EXTENSIONS:
        return JsonResponse(
            {"error": f"Unsupported image type: {ext or filename}"}, status=400
        )

    try:
        result = get_github_client().upload_image(
            article_id,
            filename,
            upload.read(),
            url_prefix=get_converter_config().image_base_path,
        )
    except BlogError as exc:
        return _error_response(exc)

    name = os.path.basename(result["path"])
    return JsonResponse(
        {
            "path": result["path"],
            "url": result["url"],
            "markdown": f"![{name}]({result['url']})",
        },
        status=201,
    )


@csrf_exempt
@require_http_methods(["POST"])
@api_auth_required
def publish(request, article_id):
    """
    Queue a build of the article page.

    POST /api/v1/articles/<id>/publish/

    Response (202): {"article_id": "my-post", "task_id": "celery-task-id"}
    """
    from blog.tasks import publish_article

    result = publish_article.delay(article_id)
    return JsonResponse({"article_id": article_id, "task_id": result.id}, status=202)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_auth_required
def draft_detail(request, article_id):
    """
    GET /api/v1/drafts/<id>/ - the autosaved draft, 404 when there is none
    PUT /api/v1/drafts/<id>/ - save the editor state
    DELETE /api/v1/drafts/<id>/ - throw the draft away
    """
    if request.method == "GET":
        draft = load_draft(article_id)
        if draft is None:
            return JsonResponse({"error": "No draft saved"}, status=404)
        return JsonResponse({"draft": draft})

    if request.method == "DELETE":
        discard_draft(article_id)
        return JsonResponse({"deleted": article_id})

    data, error = _parse_json(request)
    if error:
        return error
    return JsonResponse({"draft": save_draft(article_id, data)})
