"""Tests for the canonical stylesheet rewrite."""

import pytest

from resume_designer.domain.css_normalizer import (
    DEFAULT_FONT_FAMILY,
    canonical_stylesheet,
    capture_font,
    is_font_import,
    normalize_design_html,
    strip_images,
)

PAGE_RULE = "@page { size: 8.5in 11in; margin: 0.5in 0.6in; }"

INPUTS = [
    "<html><head><style>body { padding: 2in; margin: 0 auto; max-width: 600px; }</style></head><body>x</body></html>",
    "<html><head><title>t</title></head><body style='padding: 1in'>x</body></html>",
    "<html><body>no head at all</body></html>",
    "<section>fragment only</section>",
    "<html><head><style>@page { margin: 2cm; }</style><style>body{padding:0 !important}</style></head><body>x</body></html>",
]


class TestNormalizeDesignHtml:
    @pytest.mark.parametrize("html", INPUTS)
    def test_geometry_is_always_canonical(self, html):
        out = normalize_design_html(html, "#1d4ed8")
        assert "padding: 0.5in 0.6in;" in out
        assert PAGE_RULE in out
        assert out.count("<style>") == 1

    def test_generator_stylesheet_is_replaced(self, make_html):
        out = normalize_design_html(make_html(), "#1d4ed8")
        assert "max-width: 800px" not in out
        assert "margin: 0 auto" not in out
        assert "padding: 20px" not in out

    def test_body_style_attribute_is_stripped(self, make_html):
        out = normalize_design_html(make_html(), "#1d4ed8")
        assert 'style="padding: 40px"' not in out
        assert "<body>" in out

    def test_font_and_import_are_kept(self, make_html):
        out = normalize_design_html(make_html(), "#1d4ed8")
        assert "font-family: 'Lato', sans-serif;" in out
        assert "@import url('https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap');" in out

    def test_default_font_without_capture(self):
        out = normalize_design_html("<html><body>x</body></html>", "#1d4ed8")
        assert f"font-family: {DEFAULT_FONT_FAMILY};" in out

    def test_accent_colors_markers_and_headers(self):
        out = normalize_design_html("<ul><li>x</li></ul>", "#047857")
        assert "li::marker { color: #047857; }" in out
        assert "h2 { font-size: 14px" in out

    def test_typographic_scale(self):
        css = canonical_stylesheet("#1d4ed8")
        assert "font-size: 28px" in css
        assert "font-size: 11px" in css
        assert "line-height: 1.4" in css
        assert "margin: 14px 0 8px" in css
        assert "margin-bottom: 3px" in css

    def test_style_injected_into_existing_head(self):
        out = normalize_design_html("<html><head><title>t</title></head><body>x</body></html>", "#1d4ed8")
        assert out.index("<style>") < out.index("</head>")
        assert out.count("<head") == 1


class TestStripImages:
    def test_two_img_tags_become_zero(self, make_html):
        html = make_html(extra_body='<img src="a.jpg" alt="a"><p>x</p><IMG SRC="b.png"/>')
        out = normalize_design_html(html, "#1d4ed8")
        assert "<img" not in out.lower()

    @pytest.mark.parametrize(
        "url",
        [
            "https://cdn.example.com/photo.jpg",
            "https://cdn.example.com/photo.JPEG",
            "/static/logo.png",
            "avatar.gif?v=2",
            "icons/mail.svg",
            "https://x.io/pic.webp",
        ],
    )
    def test_bare_image_urls_are_removed(self, url):
        out = strip_images(f"<p>See {url} for my portrait</p>")
        assert url not in out
        assert "for my portrait" in out

    def test_css_background_image_url_is_removed(self):
        out = normalize_design_html(
            "<div style=\"background-image: url('https://x.io/bg.png')\">x</div>", "#1d4ed8"
        )
        assert "bg.png" not in out


class TestCaptureFont:
    def test_block_font_wins_over_inline(self):
        html = "<style>h1 { font-family: \"Playfair Display\", serif; }</style><p style=\"font-family: Arial\">x</p>"
        assert capture_font(html) == (None, '"Playfair Display", serif')

    def test_inline_font(self):
        assert capture_font('<p style="font-family: Georgia, serif">x</p>') == (None, "Georgia, serif")

    def test_important_is_dropped(self):
        _, family = capture_font("<style>body { font-family: Inter !important; }</style>")
        assert family == "Inter"

    def test_nothing_to_capture(self):
        assert capture_font("<p>plain</p>") == (None, None)


class TestFontImports:
    @pytest.mark.parametrize(
        "declaration",
        [
            "@import url('https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap');",
            '@import url("//fonts.googleapis.com/css2?family=Inter");',
            "@import 'https://fonts.bunny.net/css?family=roboto';",
        ],
    )
    def test_font_hosts(self, declaration):
        assert is_font_import(declaration)

    @pytest.mark.parametrize(
        "declaration",
        [
            "@import url('https://evil.example/override.css');",
            "@import 'print.css';",
            "@import url(https://fonts.googleapis.com.evil.example/x.css);",
        ],
    )
    def test_other_hosts(self, declaration):
        assert not is_font_import(declaration)

    def test_stylesheet_import_is_dropped(self):
        html = (
            "<html><head><style>@import url('https://evil.example/override.css'); body{}</style></head>"
            "<body>x</body></html>"
        )
        out = normalize_design_html(html, "#1d4ed8")
        assert "@import" not in out
        assert "evil.example" not in out

    def test_font_import_after_stylesheet_import_is_kept(self):
        html = (
            "<style>@import url('https://evil.example/override.css');"
            "@import url('https://fonts.googleapis.com/css2?family=Inter');"
            "body { font-family: 'Inter', sans-serif; }</style>"
        )
        font_import, family = capture_font(html)
        assert font_import == "@import url('https://fonts.googleapis.com/css2?family=Inter');"
        assert family == "'Inter', sans-serif"
