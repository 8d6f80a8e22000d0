"""
Management command to add a new article to the blog.

Asks for the article metadata, writes a starter Markdown file that shows
the supported syntax and adds the entry to articles.json. Every prompt has
a matching option; with --no-input missing values fall back to defaults.
"""

from datetime import date
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from blog.articles import DEFAULT_ICON, STATUSES, Article, ArticleCatalogue, content_path, slugify_title
from blog.exceptions import BlogError
from blog.storage import LocalStorage

STARTER_MARKDOWN = """# {title}

Начните писать вашу статью здесь.

## Примеры использования

### Обычный текст
Просто пишите текст как обычно.

### Изображения
Используйте один из форматов:
- `![Описание](путь/к/изображению.webp)` - стандартный markdown
- `[IMAGE:путь/к/изображению.webp]` - простой формат
- `[IMAGE:путь/к/изображению.webp|Описание]` - с описанием

### Сворачиваемые секции
```
>>> Заголовок секции
Контент секции, который можно свернуть
<<<
```

### Код
```python
def example():
    return "Hello, World!"
```

### Списки
- Пункт 1
- Пункт 2
- Пункт 3

### Цитаты
> Важная информация или примечание
"""


class Command(BaseCommand):
    help = "Add a new article: starter Markdown file plus articles.json entry"

    def add_arguments(self, parser):
        parser.add_argument("--title", type=str, help="Article title")
        parser.add_argument("--id", dest="article_id", type=str, help="Article id (default: from title)")
        parser.add_argument("--date", type=str, help="Publication date, YYYY-MM-DD (default: today)")
        parser.add_argument("--tags", type=str, help="Comma-separated tags")
        parser.add_argument("--excerpt", type=str, help="Short description")
        parser.add_argument("--read-time", type=int, help="Read time in minutes (default: 5)")
        parser.add_argument(
            "--status",
            type=str,
            choices=STATUSES,
            help="Article status (default: draft)",
        )
        parser.add_argument("--icon", type=str, help="Icon name, e.g. robot for icon-robot.svg")
        parser.add_argument(
            "--no-input",
            action="store_false",
            dest="interactive",
            help="Do not prompt; use options and defaults",
        )
        parser.add_argument(
            "--root",
            type=str,
            help="Site repository checkout (default: BLOG_ROOT setting)",
        )

    def handle(self, *args, **options):
        self.interactive = options.get("interactive", True)
        root = Path(options.get("root") or settings.BLOG_ROOT)

        self.stdout.write(self.style.HTTP_INFO("\nAdding a new article\n"))

        title = self._ask("Article title", options.get("title"))
        if not title:
            raise CommandError("Article title is required")

        generated_id = slugify_title(title)
        if self.interactive and not options.get("article_id"):
            self.stdout.write(self.style.WARNING(f"Generated id: {generated_id}"))
        article_id = self._ask("Article id", options.get("article_id"), default=generated_id)

        today = date.today().isoformat()
        article_date = self._ask("Publication date (YYYY-MM-DD)", options.get("date"), default=today)
        tags = self._ask("Tags (comma separated)", options.get("tags"), default="")
        excerpt = self._ask("Excerpt", options.get("excerpt"), default="")
        read_time = self._ask("Read time in minutes", options.get("read_time"), default=5)
        status = self._ask("Status (published/draft)", options.get("status"), default="draft")

        if self.interactive and not options.get("icon"):
            self._list_icons(root)
        icon_name = self._ask("Icon (e.g. robot, shield, chart)", options.get("icon"), default="")
        icon = f"icon-{icon_name}.svg" if icon_name else DEFAULT_ICON

        storage = LocalStorage(root)
        try:
            article = Article.new(
                title,
                article_id=article_id,
                date=article_date,
                tags=tags,
                excerpt=excerpt,
                status=status,
                read_time=read_time,
                icon=icon,
            )
            ArticleCatalogue(storage).create(article, STARTER_MARKDOWN.format(title=title))
        except BlogError as e:
            raise CommandError(str(e))

        markdown_file = root / content_path(article.id)
        self.stdout.write("\n" + "=" * 50)
        self.stdout.write(self.style.SUCCESS("Article created!"))
        self.stdout.write(f"Markdown file: {markdown_file}")
        self.stdout.write(f"Status: {article.status}")
        self.stdout.write(self.style.WARNING("\nNext steps:"))
        self.stdout.write(f"  1. Edit the Markdown file: {markdown_file}")
        self.stdout.write(f"  2. Put images in blog/images/{article.id}/")
        self.stdout.write(f"  3. Build the page: manage.py build_articles {article.id}")
        self.stdout.write('  4. Set the status to "published" in articles.json to publish')

    def _ask(self, question, value, default=None):
        if value not in (None, ""):
            return value
        if not self.interactive:
            return default
        suffix = f" [{default}]" if default not in (None, "") else ""
        answer = input(f"{question}{suffix}: ").strip()
        return answer or default

    def _list_icons(self, root):
        icons_dir = root / "assets" / "icons"
        if not icons_dir.is_dir():
            return
        icons = sorted(
            path.stem.removeprefix("icon-") for path in icons_dir.glob("*.svg")
        )
        if icons:
            self.stdout.write(self.style.HTTP_INFO("Available icons:"))
            self.stdout.write(self.style.WARNING(", ".join(icons)))
