import io
import json
import urllib.error

import pytest

from blog.articles import ARTICLES_INDEX, TEMPLATE_PATH, content_path
from blog.markdown import ConverterConfig, MarkdownConverter

POST_TEMPLATE = """<!DOCTYPE html>
<html lang="ru">
<head>
    <meta charset="UTF-8">
    <title>Статья - Moon</title>
    <meta name="description" content="">
    <meta name="keywords" content="">
    <meta name="article-id" content="">
    <meta name="article-date" content="">
    <meta name="article-tags" content="">
    <meta name="article-read-time" content="">
    <link rel="canonical" href="">
    <meta property="og:url" content="">
    <meta property="og:title" content="">
    <meta property="og:description" content="">
    <meta property="og:image" content="">
    <meta name="twitter:url" content="">
    <meta name="twitter:title" content="">
    <meta name="twitter:description" content="">
    <meta name="twitter:image" content="">
</head>
<body>
    <h1 class="article-title-main">Заголовок</h1>
    <div class="article-meta">
        <span class="article-date-header">Дата</span>
        <span class="article-read-time-header">5 мин чтения</span>
    </div>
    <div class="article-tags-header"></div>
    <div id="article-body"><p>Загрузка...</p></div>
</body>
</html>
"""

ARTICLES = [
    {
        "id": "ai-agents",
        "title": "AI agents in practice",
        "date": "2025-03-14",
        "tags": ["ai", "agents"],
        "excerpt": "What works and what does not",
        "contentFile": "blog/posts/2025-03-14-ai-agents.html",
        "status": "published",
        "readTime": 8,
        "icon": "icon-robot.svg",
    },
    {
        "id": "hello-world",
        "title": "Hello world",
        "date": "2025-01-05",
        "tags": [],
        "excerpt": "",
        "contentFile": "blog/posts/2025-01-05-hello-world.html",
        "status": "draft",
        "readTime": 5,
        "icon": "icon-brain.svg",
    },
]


@pytest.fixture
def converter():
    return MarkdownConverter(ConverterConfig())


@pytest.fixture
def site_root(tmp_path):
    """A local checkout of the site repository with two articles."""
    blog = tmp_path / "blog"
    (blog / "content").mkdir(parents=True)
    (blog / "posts").mkdir()
    (tmp_path / ARTICLES_INDEX).write_text(
        json.dumps({"articles": ARTICLES}, indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    (tmp_path / TEMPLATE_PATH).write_text(POST_TEMPLATE, encoding="utf-8")
    (tmp_path / content_path("ai-agents")).write_text(
        "# AI agents\n\nAgents **plan** and *act*.\n\n![Loop](loop.webp)\n",
        encoding="utf-8",
    )
    (tmp_path / content_path("hello-world")).write_text(
        "Hello!\n", encoding="utf-8"
    )
    return tmp_path


class FakeGitHubClient:
    """In-memory stand-in for GitHubClient, keyed by repository path."""

    owner = "YourMoonTG"
    repo = "yourmoontg.github.io"

    def __init__(self, files=None):
        self.files = {}
        self.commits = []
        for path, content in (files or {}).items():
            self.files[path] = content if isinstance(content, bytes) else content.encode("utf-8")

    def has_token(self):
        return True

    def _sha(self, path):
        return f"sha-{path}-{len(self.files[path])}"

    def get_file_content(self, path):
        content = self.files.get(path)
        return content.decode("utf-8") if content is not None else None

    def get_file_sha(self, path):
        return self._sha(path) if path in self.files else None

    def save_file(self, path, content, message, sha=None):
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.commits.append(("save", path, message, sha))
        self.files[path] = content
        return {"content": {"path": path}}

    def delete_file(self, path, message, sha):
        self.commits.append(("delete", path, message, sha))
        del self.files[path]

    def upload_image(self, article_id, filename, data, url_prefix="../../blog/images/"):
        path = f"blog/images/{article_id}/{filename}"
        result = self.save_file(path, data, f"Add image: {filename}", sha=self.get_file_sha(path))
        return {"path": path, "url": f"{url_prefix}{article_id}/{filename}", "result": result}

    def test_connection(self):
        return True


@pytest.fixture
def github_files():
    return {
        ARTICLES_INDEX: json.dumps({"articles": ARTICLES}, ensure_ascii=False),
        TEMPLATE_PATH: POST_TEMPLATE,
        content_path("ai-agents"): "# AI agents\n\nAgents **plan**.\n",
        content_path("hello-world"): "Hello!\n",
    }


@pytest.fixture
def fake_github(github_files):
    return FakeGitHubClient(github_files)


class FakeResponse:
    def __init__(self, status, body):
        self.status = status
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeOpener:
    """Replays queued responses and records every request it is given."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def queue(self, status=200, payload=None, raw=None):
        body = raw if raw is not None else (json.dumps(payload).encode() if payload is not None else b"")
        self.responses.append((status, body))
        return self

    def open(self, request, timeout=None):
        self.requests.append(request)
        status, body = self.responses.pop(0)
        if isinstance(status, Exception):
            raise status
        if status >= 400:
            raise urllib.error.HTTPError(
                request.full_url, status, "Error", {}, io.BytesIO(body)
            )
        return FakeResponse(status, body)

    def sent_json(self, index=-1):
        return json.loads(self.requests[index].data)


@pytest.fixture
def opener():
    return FakeOpener()
