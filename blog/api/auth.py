"""
Authentication for the editor API.

The browser editor sends ``Authorization: Bearer <token>`` with every
request; the token is the BLOG_API_TOKEN setting.
"""

import secrets
from functools import wraps

from django.conf import settings
from django.http import JsonResponse


def api_auth_required(view_func):
    """
    Decorator that requires the API bearer token.

    Usage:
        @api_auth_required
        def my_view(request):
            pass
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        api_token = getattr(settings, "BLOG_API_TOKEN", None)
        if not api_token:
            return JsonResponse(
                {"error": "API token is not configured on the server"},
                status=503,
            )

        auth_header = request.headers.get("Authorization", "")
        token = auth_header[7:] if auth_header.startswith("Bearer ") else ""

        if not token or not secrets.compare_digest(token, api_token):
            return JsonResponse(
                {"error": "Authentication required"},
                status=401,
            )

        return view_func(request, *args, **kwargs)

    return wrapper
