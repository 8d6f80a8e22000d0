import pytest

from blog.markdown import ConverterConfig
from blog.markdown.passes.images import resolve_image_path

CONFIG = ConverterConfig()


@pytest.mark.parametrize(
    "path, article_id, expected",
    [
        ("https://cdn.example.com/a.png", "post", "https://cdn.example.com/a.png"),
        ("http://example.com/a.png", "", "http://example.com/a.png"),
        ("data:image/png;base64,AAAA", "post", "data:image/png;base64,AAAA"),
        ("mailto:me@example.com", "post", "mailto:me@example.com"),
        ("photo:1.png", "post", "../../blog/images/post/photo:1.png"),
        ("HTTPS://cdn.example.com/b.png", "post", "HTTPS://cdn.example.com/b.png"),
        ("/assets/logo.svg", "post", "/assets/logo.svg"),
        ("blog/images/other/a.webp", "post", "blog/images/other/a.webp"),
        ("../../blog/images/post/a.webp", "post", "../../blog/images/post/a.webp"),
        ("diagram.webp", "post", "../../blog/images/post/diagram.webp"),
        ("diagram.webp", "", "../../blog/images/diagram.webp"),
        ("shared/diagram.webp", "post", "../../blog/images/shared/diagram.webp"),
        ("shared\\nested\\a.png", "post", "../../blog/images/shared/nested/a.png"),
    ],
)
def test_resolve_image_path(path, article_id, expected):
    assert resolve_image_path(path, article_id, CONFIG) == expected


def test_custom_base_path():
    config = ConverterConfig(image_base_path="/media/", images_segment="media")
    assert resolve_image_path("a.png", "post", config) == "/media/post/a.png"
    assert resolve_image_path("media/x/a.png", "post", config) == "media/x/a.png"


def test_bracket_image_with_alt(converter):
    html = converter.convert("[IMAGE:diagram.webp|Схема]", "post")
    assert html == (
        '<figure class="article-image">\n'
        '    <img src="../../blog/images/post/diagram.webp" alt="Схема" loading="lazy">\n'
        "</figure>"
    )


def test_bracket_image_alt_defaults_to_path(converter):
    html = converter.convert("[IMAGE: diagram.webp ]", "post")
    assert 'src="../../blog/images/post/diagram.webp"' in html
    assert 'alt="diagram.webp"' in html


def test_markdown_image(converter):
    html = converter.convert("![Architecture](arch.png)", "post")
    assert 'src="../../blog/images/post/arch.png" alt="Architecture"' in html


def test_markdown_image_empty_alt(converter):
    html = converter.convert("![](arch.png)")
    assert 'alt="arch.png"' in html


def test_image_attributes_are_quoted(converter):
    html = converter.convert('![a "quoted" <alt>](x.png)')
    assert 'alt="a &quot;quoted&quot; &lt;alt&gt;"' in html


def test_standalone_image_is_not_wrapped(converter):
    html = converter.convert("Text\n\n![a](x.png)\n\nMore")
    assert html.startswith("<p>Text</p>\n<figure")
    assert html.endswith("</figure>\n<p>More</p>")


def test_image_inside_text_stays_in_paragraph(converter):
    html = converter.convert("See ![a](x.png) here")
    assert html.startswith('<p>See <figure class="article-image">')
    assert html.endswith("</figure> here</p>")


def test_image_alt_is_not_formatted(converter):
    html = converter.convert("[IMAGE:x.png|*not* emphasis]")
    assert 'alt="*not* emphasis"' in html
    assert "<em>" not in html


def test_image_syntax_in_code_is_literal(converter):
    html = converter.convert("```\n[IMAGE:x.png]\n![a](b.png)\n```")
    assert html == "<pre><code>[IMAGE:x.png]\n![a](b.png)</code></pre>"


def test_collapsible_images_lose_article_id_by_default(converter):
    html = converter.convert(">>> Gallery\n[IMAGE:x.png]\n<<<", "post")
    assert 'src="../../blog/images/x.png"' in html


def test_collapsible_images_can_inherit_article_id():
    from blog.markdown import MarkdownConverter

    converter = MarkdownConverter(ConverterConfig(collapsible_inherits_article_id=True))
    html = converter.convert(">>> Gallery\n[IMAGE:x.png]\n<<<", "post")
    assert 'src="../../blog/images/post/x.png"' in html
