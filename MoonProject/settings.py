"""
Django settings for the Moon blog studio.

Everything deployment specific is read from the environment so the same
settings module serves the editor API, the Celery worker and the
management commands used at publish time.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-moon-blog-studio")

DEBUG = _env_bool("DJANGO_DEBUG", False)

ALLOWED_HOSTS = os.environ.get(
    "DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver"
).split(",")

INSTALLED_APPS = [
    "blog",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "MoonProject.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "MoonProject.wsgi.application"

# Articles live in a GitHub repository, not in a database
DATABASES = {}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "moon-blog-studio",
    }
}

LANGUAGE_CODE = "ru"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ---------------------------------------------------------------------------
# Blog
# ---------------------------------------------------------------------------

# Local checkout of the site repository, used by the build/add commands
BLOG_ROOT = Path(os.environ.get("BLOG_ROOT", BASE_DIR / "site"))

BLOG_MARKDOWN = {
    "image_base_path": os.environ.get("BLOG_IMAGE_BASE_PATH", "../../blog/images/"),
    "images_segment": "blog/images",
    "collapsible_inherits_article_id": _env_bool(
        "BLOG_COLLAPSIBLE_INHERITS_ARTICLE_ID", False
    ),
}

BLOG_SITE = {
    "url": os.environ.get("BLOG_SITE_URL", "https://yourmoontg.github.io"),
    "name": os.environ.get("BLOG_SITE_NAME", "Moon"),
    "default_icon": "icon-brain.svg",
}

GITHUB = {
    "owner": os.environ.get("GITHUB_OWNER", "YourMoonTG"),
    "repo": os.environ.get("GITHUB_REPO", "yourmoontg.github.io"),
    "branch": os.environ.get("GITHUB_BRANCH", "main"),
    "token": os.environ.get("GITHUB_TOKEN"),
    "api_url": os.environ.get("GITHUB_API_URL", "https://api.github.com"),
}

# Bearer token the browser editor sends to the JSON API
BLOG_API_TOKEN = os.environ.get("BLOG_API_TOKEN")

# Autosaved drafts expire after a week
BLOG_DRAFT_TIMEOUT = int(os.environ.get("BLOG_DRAFT_TIMEOUT", 7 * 24 * 60 * 60))

# ---------------------------------------------------------------------------
# Celery
# ---------------------------------------------------------------------------

CELERY_BROKER_URL = os.environ.get("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.environ.get("CELERY_RESULT_BACKEND", CELERY_BROKER_URL)
CELERY_TASK_ALWAYS_EAGER = _env_bool("CELERY_TASK_ALWAYS_EAGER", False)
CELERY_TASK_SERIALIZER = "json"
CELERY_RESULT_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "blog": {
            "handlers": ["console"],
            "level": os.environ.get("BLOG_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
