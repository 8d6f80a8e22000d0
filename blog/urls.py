from django.urls import path

from .views import EditorView

urlpatterns = [
    path("editor/", EditorView.as_view(), name="editor"),
]
