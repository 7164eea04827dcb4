"""Deterministic rewrite of a generated design's presentation layer.

Whatever stylesheet the generator produced, the output of
:func:`normalize_design_html` carries the canonical page geometry and
typography, and contains no images.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Tuple
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "'Segoe UI', Tahoma, Geneva, Verdana, sans-serif"

BODY_PADDING = "0.5in 0.6in"
PAGE_SIZE = "8.5in 11in"

# Only web-font stylesheets survive normalization.
FONT_IMPORT_HOSTS = ("fonts.googleapis.com", "fonts.bunny.net")

_STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>(.*?)</style\s*>", re.IGNORECASE | re.DOTALL)
_IMPORT_RE = re.compile(r"@import\s+(?:url\([^)]*\)|\"[^\"]*\"|'[^']*')[^;]*;", re.IGNORECASE)
_IMPORT_URL_RE = re.compile(r"@import\s+(?:url\(\s*)?[\"']?([^\"')\s;]+)", re.IGNORECASE)
_FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*([^;}<>]+)", re.IGNORECASE)
_INLINE_FONT_FAMILY_RE = re.compile(r"font-family\s*:\s*([^;}\"<>]+)", re.IGNORECASE)
_IMPORTANT_RE = re.compile(r"\s*!important\s*$", re.IGNORECASE)
_BODY_STYLE_ATTR_RE = re.compile(r"(<body\b[^>]*?)\s+style\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+)", re.IGNORECASE)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
_IMG_TAG_RE = re.compile(r"<img\b[^>]*>(?:\s*</img\s*>)?", re.IGNORECASE)
_IMAGE_URL_RE = re.compile(r"[^\s\"'()<>]+\.(?:jpe?g|png|gif|svg|webp)\b(?:\?[^\s\"'()<>]*)?", re.IGNORECASE)


def canonical_stylesheet(
    accent_color: str,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_import: Optional[str] = None,
) -> str:
    """The stylesheet every accepted design ends up with."""
    css = f"""
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
@page {{ size: {PAGE_SIZE}; margin: {BODY_PADDING}; }}
html, body {{ background: #ffffff; }}
body {{
  font-family: {font_family};
  font-size: 11px;
  line-height: 1.4;
  color: #333333;
  width: 100%;
  max-width: none;
  margin: 0;
  padding: {BODY_PADDING};
}}
body > div, body > main, .container, .wrapper, .resume, .page, main {{
  width: 100%;
  max-width: none;
  margin-left: 0;
  margin-right: 0;
}}
h1 {{ font-size: 28px; font-weight: 700; color: #1a1a1a; margin-bottom: 6px; }}
h2 {{ font-size: 14px; font-weight: 600; color: {accent_color}; margin: 14px 0 8px; border-bottom: 2px solid {accent_color}; padding-bottom: 3px; text-transform: uppercase; }}
h3 {{ font-size: 12px; font-weight: 600; color: #1a1a1a; margin-bottom: 3px; }}
p {{ margin-bottom: 3px; }}
ul {{ margin-left: 16px; margin-top: 4px; }}
li {{ margin-bottom: 3px; line-height: 1.4; }}
li::marker {{ color: {accent_color}; }}
a {{ color: {accent_color}; text-decoration: none; }}
@media print {{
  body {{ padding: 0; }}
}}
"""
    if font_import:
        css = f"\n{font_import}" + css
    return css


def is_font_import(declaration: str) -> bool:
    """Whether an ``@import`` declaration loads a stylesheet from a web-font host."""
    match = _IMPORT_URL_RE.match(declaration.strip())
    if not match:
        return False
    url = match.group(1)
    if url.startswith("//"):
        url = "https:" + url
    host = (urlsplit(url).hostname or "").lower()
    return host in FONT_IMPORT_HOSTS


def capture_font(html: str) -> Tuple[Optional[str], Optional[str]]:
    """First font ``@import`` declaration and first ``font-family`` value, if any.

    Style blocks are searched before inline styles. Imports from any other
    host are dropped.
    """
    blocks = [m.group(1) for m in _STYLE_BLOCK_RE.finditer(html)]
    sources = [(block, _FONT_FAMILY_RE) for block in blocks]
    # Inline style attributes are double-quoted, so their values stop at a quote
    sources.append((_STYLE_BLOCK_RE.sub("", html), _INLINE_FONT_FAMILY_RE))

    font_import = None
    for source, _ in sources:
        for match in _IMPORT_RE.finditer(source):
            declaration = match.group(0).strip()
            if is_font_import(declaration):
                font_import = declaration
                break
            logger.debug(f"Dropping non-font import: {declaration}")
        if font_import:
            break

    font_family = None
    for source, pattern in sources:
        match = pattern.search(source)
        if match:
            value = _IMPORTANT_RE.sub("", match.group(1).strip())
            if value:
                font_family = value
                break

    return font_import, font_family


def strip_body_style(html: str) -> str:
    return _BODY_STYLE_ATTR_RE.sub(r"\1", html)


def replace_style_blocks(html: str, stylesheet: str) -> str:
    """Drop every ``<style>`` block and inject ``stylesheet`` into ``<head>``."""
    html = _STYLE_BLOCK_RE.sub("", html)
    style_tag = f"<style>{stylesheet}</style>"

    if _HEAD_CLOSE_RE.search(html):
        return _HEAD_CLOSE_RE.sub(lambda m: f"{style_tag}\n{m.group(0)}", html, count=1)

    head = f"<head>\n<meta charset=\"UTF-8\">\n{style_tag}\n</head>"
    if _HTML_OPEN_RE.search(html):
        return _HTML_OPEN_RE.sub(lambda m: f"{m.group(0)}\n{head}", html, count=1)
    return f"{head}\n{html}"


def strip_images(html: str) -> str:
    """Remove every ``<img>`` tag and every bare image URL."""
    html = _IMG_TAG_RE.sub("", html)
    return _IMAGE_URL_RE.sub("", html)


def normalize_design_html(html: str, accent_color: str) -> str:
    """
    Rewrite ``html`` into canonical form.

    Steps, in order:
    1. capture the web-font ``@import`` and first ``font-family``;
    2. strip the ``style`` attribute from ``<body>``;
    3. replace all ``<style>`` blocks with :func:`canonical_stylesheet`;
    4. remove images and image URLs.
    """
    font_import, font_family = capture_font(html)
    html = strip_body_style(html)
    stylesheet = canonical_stylesheet(accent_color, font_family or DEFAULT_FONT_FAMILY, font_import)
    html = replace_style_blocks(html, stylesheet)
    return strip_images(html)
