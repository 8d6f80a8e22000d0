"""
Client for the GitHub REST API (v3) contents endpoints.

The site repository is the article database: Markdown sources, the
articles.json catalogue, images and the built pages are all files read and
written through ``/repos/{owner}/{repo}/contents/{path}``.
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import quote

from blog.articles import IMAGES_DIR
from blog.exceptions import GitHubError

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"


@dataclass
class GitHubFile:
    path: str
    sha: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class GitHubClient:
    def __init__(
        self,
        owner: str,
        repo: str,
        token: str | None = None,
        branch: str = "main",
        base_url: str = API_URL,
        timeout: float = 30,
        opener: urllib.request.OpenerDirector | None = None,
    ):
        self.owner = owner
        self.repo = repo
        self.token = token
        self.branch = branch
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.opener = opener or urllib.request.build_opener()

    @classmethod
    def from_settings(cls, **overrides) -> "GitHubClient":
        """Build a client from the GITHUB setting."""
        from django.conf import settings

        config = getattr(settings, "GITHUB", {})
        options = {
            "owner": config.get("owner"),
            "repo": config.get("repo"),
            "token": config.get("token"),
            "branch": config.get("branch", "main"),
            "base_url": config.get("api_url", API_URL),
        }
        options.update(overrides)
        return cls(**options)

    def has_token(self) -> bool:
        return bool(self.token)

    def _contents_endpoint(self, path: str) -> str:
        return f"/repos/{self.owner}/{self.repo}/contents/{quote(path)}"

    @staticmethod
    def _error_message(exc: urllib.error.HTTPError) -> str:
        try:
            payload = json.loads(exc.read() or b"{}")
        except (ValueError, OSError):
            payload = {}
        message = payload.get("message") if isinstance(payload, dict) else None
        return message or f"HTTP {exc.code}: {exc.reason}"

    def request(self, method: str, endpoint: str, data: dict | None = None):
        """
        Send one API request and return the decoded JSON body.

        Returns None for empty responses (204 No Content). Raises GitHubError
        when no token is configured, for HTTP errors and for network failures.
        """
        if not self.token:
            raise GitHubError(
                "GitHub token is not configured. Set a personal access token."
            )

        body = json.dumps(data).encode("utf-8") if data is not None else None
        request = urllib.request.Request(
            url=f"{self.base_url}{endpoint}",
            data=body,
            method=method,
            headers={
                "Authorization": f"token {self.token}",
                "Accept": "application/vnd.github.v3+json",
                "Content-Type": "application/json",
            },
        )

        try:
            with self.opener.open(request, timeout=self.timeout) as response:
                status = response.status
                payload = response.read()
        except urllib.error.HTTPError as exc:
            message = self._error_message(exc)
            if exc.code != 404:
                logger.error("GitHub API error for %s %s: %s", method, endpoint, message)
            raise GitHubError(message, status=exc.code) from exc
        except (urllib.error.URLError, OSError) as exc:
            logger.error("GitHub request %s %s failed: %s", method, endpoint, exc)
            raise GitHubError(f"GitHub request failed: {exc}") from exc

        if status == 204 or not payload:
            return None
        return json.loads(payload)

    def get_file(self, path: str) -> GitHubFile | None:
        """Fetch a file, or None when it does not exist."""
        try:
            data = self.request("GET", self._contents_endpoint(path))
        except GitHubError as exc:
            if exc.status == 404:
                return None
            raise

        if not isinstance(data, dict):
            raise GitHubError(f"{path} is a directory, not a file")

        # The API wraps base64 content at 60 columns
        content = base64.b64decode("".join((data.get("content") or "").split()))
        return GitHubFile(path=path, sha=data.get("sha", ""), content=content)

    def get_file_content(self, path: str) -> str | None:
        github_file = self.get_file(path)
        return github_file.text if github_file else None

    def get_file_sha(self, path: str) -> str | None:
        github_file = self.get_file(path)
        return github_file.sha if github_file else None

    def save_file(self, path: str, content, message: str, sha: str | None = None):
        """
        Create or update a file.

        ``content`` is text (encoded as UTF-8) or raw bytes such as an image.
        ``sha`` is required by GitHub when the file already exists.
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        data = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            data["sha"] = sha

        result = self.request("PUT", self._contents_endpoint(path), data)
        logger.info("Committed %s: %s", path, message)
        return result

    def delete_file(self, path: str, message: str, sha: str):
        data = {"message": message, "sha": sha, "branch": self.branch}
        result = self.request("DELETE", self._contents_endpoint(path), data)
        logger.info("Deleted %s: %s", path, message)
        return result

    def upload_image(
        self,
        article_id: str,
        filename: str,
        data: bytes,
        url_prefix: str = "../../blog/images/",
    ) -> dict:
        """
        Store an image in the article's image directory.

        Returns the repository path, the URL to use from an article page and
        the API response.
        """
        image_name = PurePosixPath(filename.replace("\\", "/")).name
        if not image_name:
            raise GitHubError("Image file name is required")

        image_path = f"{IMAGES_DIR}/{article_id}/{image_name}"
        sha = self.get_file_sha(image_path)
        result = self.save_file(image_path, data, f"Add image: {image_name}", sha=sha)

        if not url_prefix.endswith("/"):
            url_prefix += "/"
        return {
            "path": image_path,
            "url": f"{url_prefix}{article_id}/{image_name}",
            "result": result,
        }

    def test_connection(self) -> bool:
        try:
            self.request("GET", f"/repos/{self.owner}/{self.repo}")
        except GitHubError as exc:
            raise GitHubError(
                f"Could not connect to GitHub: {exc}", status=exc.status
            ) from exc
        return True
