"""Pure checks applied to each generated design.

All checks are pattern scans over the whole document, so a disallowed
declaration is found wherever it appears: in a ``<style>`` block, in an
inline ``style`` attribute, or in a selector the scan does not recognize.
"""

from __future__ import annotations

import json
import re
from typing import Iterable, List

from ..domain.contrast import extract_hex_colors, normalize_hex
from ..errors import MalformedResponseError
from ..palettes import ALLOWED_BACKGROUND_KEYWORDS

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)
_STYLE_BLOCK_RE = re.compile(r"<style\b[^>]*>(.*?)(?:</style\s*>|\Z)", re.IGNORECASE | re.DOTALL)
_STYLE_ATTR_RE = re.compile(r"\bstyle\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s>\"']+))", re.IGNORECASE)
_BACKGROUND_DECL_RE = re.compile(r"(?<![\w-])(background(?:-color)?)\s*:\s*([^;}]+)", re.IGNORECASE)
_WHITE_RGBA_RE = re.compile(r"rgba\(\s*255\s*,\s*255\s*,\s*255\s*,[^)]*\)")
_ALLOWED_BACKGROUND_PREFIXES = ("url(", "linear-gradient(")
_IMPORTANT_RE = re.compile(r"\s*!important\s*$")


def parse_design_response(raw: str) -> str:
    """Extract the ``html`` field from a raw generator response.

    A surrounding markdown code fence is tolerated.

    Raises:
        MalformedResponseError: the body is not a JSON object with a
            non-empty string ``html`` field.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise MalformedResponseError("Empty response body")

    text = raw.strip()
    fenced = _CODE_FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e.msg}") from e

    if not isinstance(payload, dict):
        raise MalformedResponseError("Response JSON is not an object")
    html = payload.get("html")
    if not isinstance(html, str) or not html.strip():
        raise MalformedResponseError('Response JSON has no string "html" field')
    return html


def is_allowed_background(value: str) -> bool:
    value = _IMPORTANT_RE.sub("", value.strip().lower())
    if value in ALLOWED_BACKGROUND_KEYWORDS:
        return True
    if value.startswith(_ALLOWED_BACKGROUND_PREFIXES):
        return True
    return bool(_WHITE_RGBA_RE.fullmatch(value))


def css_sources(html: str) -> List[str]:
    """Every ``<style>`` block body and every ``style`` attribute value.

    An unclosed ``<style>`` runs to the end of the document, and attribute
    values may be double-quoted, single-quoted or unquoted.
    """
    html = html or ""
    sources = [m.group(1) for m in _STYLE_BLOCK_RE.finditer(html)]
    without_blocks = _STYLE_BLOCK_RE.sub("", html)
    for m in _STYLE_ATTR_RE.finditer(without_blocks):
        sources.append(next(value for value in m.groups() if value is not None))
    return sources


def find_forbidden_backgrounds(html: str) -> List[str]:
    """Every ``background``/``background-color`` declaration with a disallowed value.

    Prose such as "Background: Computer Science" is not a declaration and
    is ignored.
    """
    found: List[str] = []
    for source in css_sources(html):
        for match in _BACKGROUND_DECL_RE.finditer(source):
            value = match.group(2).strip()
            if not value or is_allowed_background(value):
                continue
            declaration = f"{match.group(1).lower()}: {value}"
            if declaration not in found:
                found.append(declaration)
    return found


def find_unauthorized_colors(html: str, allowed: Iterable[str]) -> List[str]:
    """Hex colors in ``html`` outside ``allowed``.

    Comparison is case-insensitive and treats ``#abc`` and ``#aabbcc`` as the
    same color.
    """
    allowed_set = {normalize_hex(color) for color in allowed}
    allowed_set.discard(None)
    return [color.lower() for color in extract_hex_colors(html) if normalize_hex(color) not in allowed_set]
