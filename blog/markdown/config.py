from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterConfig:
    """
    Settings the Markdown converter needs, passed in at construction.

    image_base_path: prefix for relative image paths, always ends with "/"
    images_segment: paths that already contain this segment are used as-is
    collapsible_inherits_article_id: convert collapsible bodies with the
        enclosing article id instead of an empty one
    """

    image_base_path: str = "../../blog/images/"
    images_segment: str = "blog/images"
    collapsible_inherits_article_id: bool = False

    def __post_init__(self):
        if not self.image_base_path.endswith("/"):
            object.__setattr__(self, "image_base_path", self.image_base_path + "/")


def get_converter_config():
    """
    Build the converter configuration from the BLOG_MARKDOWN setting.

    Unknown keys are ignored so the setting can carry values for other tools.
    """
    from django.conf import settings

    options = getattr(settings, "BLOG_MARKDOWN", {}) or {}
    known = ConverterConfig.__dataclass_fields__.keys()
    return ConverterConfig(**{k: v for k, v in options.items() if k in known})
