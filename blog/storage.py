"""
Storage backends for the site repository.

Both backends address files by their repository-relative POSIX path
(``blog/content/hello.md``). ``message`` is the commit message for
backends that record history and is ignored on the local filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import BlogError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Files in a local checkout of the site repository."""

    def __init__(self, root):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise BlogError(f"Path escapes the site root: {path}")
        return target

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_text(self, path: str) -> str | None:
        target = self._resolve(path)
        if not target.is_file():
            return None
        return target.read_text(encoding="utf-8")

    def write_text(self, path: str, text: str, message: str | None = None) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        logger.debug("Wrote %s", target)

    def write_bytes(self, path: str, data: bytes, message: str | None = None) -> None:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.debug("Wrote %s", target)

    def delete(self, path: str, message: str | None = None) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            return False
        target.unlink()
        logger.debug("Deleted %s", target)
        return True


class GitHubStorage:
    """Files in the GitHub repository, one commit per write."""

    def __init__(self, client):
        self.client = client

    def exists(self, path: str) -> bool:
        return self.client.get_file_sha(path) is not None

    def read_text(self, path: str) -> str | None:
        return self.client.get_file_content(path)

    def write_text(self, path: str, text: str, message: str | None = None) -> None:
        self._write(path, text, message)

    def write_bytes(self, path: str, data: bytes, message: str | None = None) -> None:
        self._write(path, data, message)

    def _write(self, path, content, message):
        # Updating an existing file requires its current blob sha
        sha = self.client.get_file_sha(path)
        self.client.save_file(path, content, message or f"Update {path}", sha=sha)

    def delete(self, path: str, message: str | None = None) -> bool:
        sha = self.client.get_file_sha(path)
        if not sha:
            return False
        self.client.delete_file(path, message or f"Delete {path}", sha)
        return True
