import json
from types import SimpleNamespace

import pytest
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile

from blog.articles import ARTICLES_INDEX, content_path
from blog.drafts import load_draft, save_draft
from blog.exceptions import GitHubError

TOKEN = "secret-token"
AUTH = {"HTTP_AUTHORIZATION": f"Bearer {TOKEN}"}


@pytest.fixture(autouse=True)
def api_setup(settings, monkeypatch, fake_github):
    settings.BLOG_API_TOKEN = TOKEN
    monkeypatch.setattr("blog.api.views.get_github_client", lambda: fake_github)
    cache.clear()
    yield
    cache.clear()


def post_json(client, url, data, **extra):
    return client.post(url, data=json.dumps(data), content_type="application/json", **{**AUTH, **extra})


def put_json(client, url, data):
    return client.put(url, data=json.dumps(data), content_type="application/json", **AUTH)


class TestAuth:
    def test_missing_token(self, client):
        response = client.post("/api/v1/preview/", data="{}", content_type="application/json")
        assert response.status_code == 401

    def test_wrong_token(self, client):
        response = post_json(client, "/api/v1/preview/", {}, HTTP_AUTHORIZATION="Bearer nope")
        assert response.status_code == 401

    def test_server_without_token(self, client, settings):
        settings.BLOG_API_TOKEN = None
        response = post_json(client, "/api/v1/preview/", {"markdown": "x"})
        assert response.status_code == 503

    def test_method_not_allowed(self, client):
        response = client.get("/api/v1/preview/", **AUTH)
        assert response.status_code == 405


class TestConversion:
    def test_preview(self, client):
        response = post_json(
            client, "/api/v1/preview/", {"markdown": "# Hi\n\n[IMAGE:a.png]", "article_id": "post"}
        )
        assert response.status_code == 200
        html = response.json()["html"]
        assert html.startswith("<h1>Hi</h1>")
        assert 'src="../../blog/images/post/a.png"' in html

    def test_preview_invalid_json(self, client):
        response = client.post("/api/v1/preview/", data="{not json", content_type="application/json", **AUTH)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    def test_preview_rejects_non_string(self, client):
        response = post_json(client, "/api/v1/preview/", {"markdown": ["x"]})
        assert response.status_code == 400

    def test_html_to_markdown(self, client):
        response = post_json(client, "/api/v1/html-to-markdown/", {"html": "<p><strong>Hi</strong></p>"})
        assert response.status_code == 200
        assert response.json() == {"markdown": "**Hi**"}


class TestConnection:
    def test_connected(self, client):
        response = client.get("/api/v1/connection/", **AUTH)
        assert response.json() == {"connected": True, "repository": "YourMoonTG/yourmoontg.github.io"}

    def test_failure(self, client, fake_github, monkeypatch):
        def fail():
            raise GitHubError("Could not connect to GitHub: Bad credentials", status=401)

        monkeypatch.setattr(fake_github, "test_connection", fail)
        response = client.get("/api/v1/connection/", **AUTH)
        assert response.status_code == 502
        assert "Bad credentials" in response.json()["error"]


class TestArticles:
    def test_list(self, client):
        response = client.get("/api/v1/articles/", **AUTH)
        assert response.status_code == 200
        assert [a["id"] for a in response.json()["articles"]] == ["ai-agents", "hello-world"]

    def test_detail(self, client):
        response = client.get("/api/v1/articles/ai-agents/", **AUTH)
        data = response.json()
        assert data["article"]["readTime"] == 8
        assert data["markdown"].startswith("# AI agents")

    def test_detail_missing(self, client):
        response = client.get("/api/v1/articles/missing/", **AUTH)
        assert response.status_code == 404
        assert "missing" in response.json()["error"]

    def test_create(self, client, fake_github):
        save_draft("fresh", {"title": "Fresh", "markdown": "draft"})
        response = post_json(
            client,
            "/api/v1/articles/",
            {
                "article": {"title": "Fresh", "id": "fresh", "date": "2025-02-10", "tags": "a, b"},
                "markdown": "# Fresh\n",
            },
        )

        assert response.status_code == 201
        article = response.json()["article"]
        assert article["contentFile"] == "blog/posts/2025-02-10-fresh.html"
        assert article["tags"] == ["a", "b"]
        assert fake_github.get_file_content(content_path("fresh")) == "# Fresh\n"
        assert '"fresh"' in fake_github.get_file_content(ARTICLES_INDEX)
        assert load_draft("fresh") is None

    def test_create_without_title(self, client):
        response = post_json(client, "/api/v1/articles/", {"article": {}, "markdown": ""})
        assert response.status_code == 400

    def test_create_duplicate(self, client):
        response = post_json(client, "/api/v1/articles/", {"article": {"title": "Hello world"}})
        assert response.status_code == 409

    @pytest.mark.parametrize(
        "payload",
        [
            {"article": ["x"]},
            {"article": "Hello"},
            {"article": {"title": 5}},
            {"article": {"title": "T", "date": 20250101}},
            {"article": {"title": "T", "tags": [1, 2]}},
            {"article": {"title": "T", "tags": 3}},
            {"article": {"title": "T", "excerpt": 7}},
            {"article": {"title": "T"}, "markdown": 5},
        ],
    )
    def test_create_wrong_field_types(self, client, fake_github, payload):
        response = post_json(client, "/api/v1/articles/", payload)
        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_github.commits == []

    def test_update(self, client, fake_github):
        response = put_json(
            client,
            "/api/v1/articles/hello-world/",
            {"article": {"title": "Hello again", "status": "published"}, "markdown": "Updated\n"},
        )
        assert response.status_code == 200
        assert response.json()["article"]["title"] == "Hello again"
        assert fake_github.get_file_content(content_path("hello-world")) == "Updated\n"
        assert fake_github.commits[-1][2] == "Update article: Hello again"

    def test_update_invalid(self, client):
        response = put_json(client, "/api/v1/articles/hello-world/", {"article": {"date": "tomorrow"}})
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "payload",
        [
            {"article": ["x"]},
            {"article": {"title": 5}},
            {"article": {"date": 20250101}},
            {"article": {"tags": [1, 2]}},
            {"article": {}, "markdown": 5},
        ],
    )
    def test_update_wrong_field_types(self, client, fake_github, payload):
        response = put_json(client, "/api/v1/articles/hello-world/", payload)
        assert response.status_code == 400
        assert fake_github.commits == []

    def test_corrupt_catalogue(self, client, fake_github):
        fake_github.files[ARTICLES_INDEX] = b"{not json"

        response = client.get("/api/v1/articles/", **AUTH)

        assert response.status_code == 400
        assert "is not valid JSON" in response.json()["error"]

    def test_delete(self, client, fake_github):
        response = client.delete("/api/v1/articles/hello-world/", **AUTH)
        assert response.json() == {"deleted": "hello-world"}
        assert content_path("hello-world") not in fake_github.files

    def test_github_failure(self, client, fake_github, monkeypatch):
        def fail(path):
            raise GitHubError("API rate limit exceeded", status=403)

        monkeypatch.setattr(fake_github, "get_file_content", fail)
        response = client.get("/api/v1/articles/", **AUTH)
        assert response.status_code == 502
        assert response.json() == {"error": "API rate limit exceeded"}


class TestImages:
    def test_upload(self, client, fake_github):
        upload = SimpleUploadedFile("diagram.webp", b"RIFF", content_type="image/webp")
        response = client.post("/api/v1/articles/ai-agents/images/", {"file": upload}, **AUTH)

        assert response.status_code == 201
        assert response.json() == {
            "path": "blog/images/ai-agents/diagram.webp",
            "url": "../../blog/images/ai-agents/diagram.webp",
            "markdown": "![diagram.webp](../../blog/images/ai-agents/diagram.webp)",
        }
        assert fake_github.files["blog/images/ai-agents/diagram.webp"] == b"RIFF"

    def test_upload_requires_file(self, client):
        response = client.post("/api/v1/articles/ai-agents/images/", {}, **AUTH)
        assert response.status_code == 400

    def test_upload_rejects_other_types(self, client):
        upload = SimpleUploadedFile("notes.txt", b"text")
        response = client.post("/api/v1/articles/ai-agents/images/", {"file": upload}, **AUTH)
        assert response.status_code == 400
        assert ".txt" in response.json()["error"]


def test_publish_queues_task(client, monkeypatch):
    queued = []

    def delay(article_id):
        queued.append(article_id)
        return SimpleNamespace(id="task-1")

    monkeypatch.setattr("blog.tasks.publish_article", SimpleNamespace(delay=delay))
    response = client.post("/api/v1/articles/ai-agents/publish/", **AUTH)

    assert response.status_code == 202
    assert response.json() == {"article_id": "ai-agents", "task_id": "task-1"}
    assert queued == ["ai-agents"]


class TestDrafts:
    def test_missing(self, client):
        assert client.get("/api/v1/drafts/post/", **AUTH).status_code == 404

    def test_save_load_discard(self, client):
        response = put_json(client, "/api/v1/drafts/post/", {"title": "T", "markdown": "# T", "junk": 1})
        assert response.json() == {"draft": {"title": "T", "markdown": "# T", "id": "post"}}

        response = client.get("/api/v1/drafts/post/", **AUTH)
        assert response.json()["draft"]["markdown"] == "# T"

        client.delete("/api/v1/drafts/post/", **AUTH)
        assert load_draft("post") is None


def test_editor_page(client, settings):
    settings.GITHUB = {"owner": "YourMoonTG", "repo": "yourmoontg.github.io"}
    response = client.get("/editor/")
    assert response.status_code == 200
    content = response.content.decode("utf-8")
    assert "YourMoonTG/yourmoontg.github.io" in content
    assert "<h1>Новая статья</h1>" in content
