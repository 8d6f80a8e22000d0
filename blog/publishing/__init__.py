from .builder import ArticleBuilder, BuildReport
from .template import SiteConfig, format_article_date, get_site_config, stamp_template

__all__ = (
    "ArticleBuilder",
    "BuildReport",
    "SiteConfig",
    "format_article_date",
    "get_site_config",
    "stamp_template",
)
