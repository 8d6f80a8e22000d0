"""
Management command to build static article pages from Markdown.

Reads blog/articles.json, blog/content/<id>.md and blog/post-template.html
from the local site checkout and writes blog/posts/<date>-<id>.html.
"""

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from blog.exceptions import BlogError
from blog.publishing import ArticleBuilder
from blog.storage import LocalStorage


class Command(BaseCommand):
    help = "Build static HTML pages for one article or for all articles"

    def add_arguments(self, parser):
        parser.add_argument(
            "article_id",
            nargs="?",
            help="Id of the article to build",
        )
        parser.add_argument(
            "--all",
            action="store_true",
            help="Build every article in articles.json",
        )
        parser.add_argument(
            "--root",
            type=str,
            help="Site repository checkout (default: BLOG_ROOT setting)",
        )

    def handle(self, *args, **options):
        article_id = options.get("article_id")
        build_all = options.get("all")
        root = Path(options.get("root") or settings.BLOG_ROOT)

        if not article_id and not build_all:
            raise CommandError(
                "Usage:\n"
                "  manage.py build_articles <article-id>  - build one article\n"
                "  manage.py build_articles --all         - build all articles"
            )

        builder = ArticleBuilder(LocalStorage(root))

        if build_all:
            self._build_all(builder)
            return

        self.stdout.write(f"Building article: {article_id}")
        try:
            path = builder.build(article_id)
        except BlogError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f"Article built: {root / path}"))

    def _build_all(self, builder):
        self.stdout.write("Building all articles...\n")

        try:
            report = builder.build_all()
        except BlogError as e:
            raise CommandError(str(e))

        for path in report.built:
            self.stdout.write(self.style.SUCCESS(f"  ✓ {path}"))
        for article_id, error in report.failed.items():
            self.stdout.write(self.style.ERROR(f'  ✗ "{article_id}": {error}'))

        self.stdout.write("\n" + "=" * 60)
        self.stdout.write(f"Built:  {len(report.built)}")
        self.stdout.write(f"Failed: {len(report.failed)}")
        self.stdout.write("=" * 60)

        if not report.ok:
            raise CommandError(f"{len(report.failed)} article(s) failed to build")

        self.stdout.write(self.style.SUCCESS("\nBUILD COMPLETE"))
