"""
Exceptions raised by the blog studio outside the Markdown converter.

The converter itself never raises; these cover GitHub access, the article
catalogue and page builds. API views map them to HTTP statuses and
management commands turn them into CommandError.
"""


class BlogError(Exception):
    """Base class for every error surfaced to the operator."""


class GitHubError(BlogError):
    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class ArticleError(BlogError):
    pass


class ArticleNotFoundError(ArticleError):
    def __init__(self, article_id):
        super().__init__(f'Article "{article_id}" was not found')
        self.article_id = article_id


class DuplicateArticleError(ArticleError):
    def __init__(self, article_id):
        super().__init__(f'Article "{article_id}" already exists')
        self.article_id = article_id


class BuildError(BlogError):
    pass


class MarkdownNotFoundError(BuildError):
    def __init__(self, path):
        super().__init__(f"Markdown file not found: {path}")
        self.path = path


class TemplateNotFoundError(BuildError):
    def __init__(self, path):
        super().__init__(f"Template not found: {path}")
        self.path = path
