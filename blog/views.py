from django.conf import settings
from django.views.generic import TemplateView

from .articles import STATUSES


class EditorView(TemplateView):
    """
    Shell page for the browser editor.

    The page talks to the JSON API under /api/v1/; the API token is entered
    in the page and kept by the browser.
    """

    template_name = "blog/editor.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        github = getattr(settings, "GITHUB", {})
        context["repository"] = f"{github.get('owner')}/{github.get('repo')}"
        context["statuses"] = STATUSES
        return context
