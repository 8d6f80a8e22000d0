"""
Celery tasks for publishing articles.

Publishing renders the article's Markdown into the page shell and commits
the resulting HTML to the site repository. Run a worker with:
    celery -A MoonProject worker -l info
"""

import logging

from celery import shared_task

from .exceptions import ArticleError, BuildError, GitHubError

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(GitHubError,),
    retry_backoff=5,
    retry_kwargs={"max_retries": 3},
)
def publish_article(self, article_id):
    """
    Build an article page from the GitHub repository and commit it.

    Args:
        article_id: Id of the article in articles.json

    Returns:
        Dict with the built page path, or the error for content problems
        that a retry cannot fix
    """
    from .github import GitHubClient
    from .publishing import ArticleBuilder
    from .storage import GitHubStorage

    client = GitHubClient.from_settings()
    if not client.has_token():
        logger.error(f"Could not publish '{article_id}': GitHub token is not configured")
        return {
            "success": False,
            "article_id": article_id,
            "error": "GitHub token is not configured",
        }

    builder = ArticleBuilder(GitHubStorage(client))

    try:
        path = builder.build(article_id)
    except (ArticleError, BuildError) as e:
        logger.warning(f"Could not publish '{article_id}': {e}")
        return {"success": False, "article_id": article_id, "error": str(e)}

    logger.info(f"Published '{article_id}' to {path}")
    return {"success": True, "article_id": article_id, "path": path}
