from .client import GitHubClient, GitHubFile

__all__ = ("GitHubClient", "GitHubFile")
