"""
Celery application for the blog studio.

Publishing an article takes several GitHub API round trips, so the editor
API queues it as a task and answers right away. Start a worker with:
    celery -A MoonProject worker -l info
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "MoonProject.settings")

app = Celery("MoonProject")

# CELERY_BROKER_URL, CELERY_TASK_ALWAYS_EAGER, ... from settings.py
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up blog/tasks.py
app.autodiscover_tasks()
