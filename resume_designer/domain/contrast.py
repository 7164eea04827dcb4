"""WCAG 2.1 contrast validation.

Pure functions over hex color strings and HTML text. Nothing here raises on
malformed colors found in a document: they are skipped and reported as
warnings.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

WCAG_STANDARDS: Dict[str, float] = {
    "AA_NORMAL": 4.5,  # < 18pt, or < 14pt bold
    "AA_LARGE": 3.0,
    "AAA_NORMAL": 7.0,
    "AAA_LARGE": 4.5,
}

WHITE = "#ffffff"

# Skip numeric character references such as "&#169;"
HEX_COLOR_RE = re.compile(r"(?<!&)#([a-f0-9]{6}|[a-f0-9]{3})\b", re.IGNORECASE)
_HEX_RE = re.compile(r"#?([0-9a-f]{6}|[0-9a-f]{3})", re.IGNORECASE)

# Professional colors that meet WCAG AA on white
SAFE_COLORS = [
    "#1e40af",  # navy blue
    "#065f46",  # forest green
    "#7c3aed",  # purple
    "#991b1b",  # burgundy
    "#0f766e",  # teal
    "#1e3a8a",  # deep blue
    "#475569",  # slate gray
    "#1a1a1a",  # near black
]


@dataclass
class ContrastCheck:
    """One foreground/background pairing and its WCAG results."""

    foreground: str
    background: str
    ratio: float
    meets_aa: bool
    meets_aaa: bool
    context: str


@dataclass
class ContrastReport:
    passed: bool
    checks: List[ContrastCheck] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


def normalize_hex(color: str) -> Optional[str]:
    """Return ``#rrggbb`` for a 3- or 6-digit hex color, or None if malformed."""
    if not isinstance(color, str):
        return None
    match = _HEX_RE.fullmatch(color.strip())
    if not match:
        return None
    digits = match.group(1).lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def hex_to_rgb(color: str) -> Optional[Tuple[int, int, int]]:
    """Parse ``#RRGGBB`` (or ``#RGB``) into channels; None on malformed input."""
    normalized = normalize_hex(color)
    if normalized is None:
        return None
    return (int(normalized[1:3], 16), int(normalized[3:5], 16), int(normalized[5:7], 16))


def relative_luminance(r: int, g: int, b: int) -> float:
    """https://www.w3.org/TR/WCAG21/#dfn-relative-luminance"""

    def _channel(value: int) -> float:
        s = value / 255
        return s / 12.92 if s <= 0.03928 else ((s + 0.055) / 1.055) ** 2.4

    return 0.2126 * _channel(r) + 0.7152 * _channel(g) + 0.0722 * _channel(b)


def contrast_ratio(color_a: str, color_b: str) -> float:
    """https://www.w3.org/TR/WCAG21/#dfn-contrast-ratio

    Raises:
        ValueError: if either color is not a valid hex color
    """
    rgb_a = hex_to_rgb(color_a)
    rgb_b = hex_to_rgb(color_b)
    if rgb_a is None or rgb_b is None:
        raise ValueError(f"Invalid color format: {color_a} or {color_b}")

    lum_a = relative_luminance(*rgb_a)
    lum_b = relative_luminance(*rgb_b)
    lighter, darker = max(lum_a, lum_b), min(lum_a, lum_b)
    return (lighter + 0.05) / (darker + 0.05)


def meets_aa(foreground: str, background: str, is_large_text: bool = False) -> bool:
    required = WCAG_STANDARDS["AA_LARGE"] if is_large_text else WCAG_STANDARDS["AA_NORMAL"]
    return contrast_ratio(foreground, background) >= required


def meets_aaa(foreground: str, background: str, is_large_text: bool = False) -> bool:
    required = WCAG_STANDARDS["AAA_LARGE"] if is_large_text else WCAG_STANDARDS["AAA_NORMAL"]
    return contrast_ratio(foreground, background) >= required


def extract_hex_colors(html: str) -> List[str]:
    """Distinct hex colors in first-seen order, as written (case preserved)."""
    seen = set()
    colors: List[str] = []
    for match in HEX_COLOR_RE.finditer(html or ""):
        color = match.group(0)
        key = color.lower()
        if key not in seen:
            seen.add(key)
            colors.append(color)
    return colors


def check_pair(foreground: str, background: str, context: str, is_large_text: bool = False) -> ContrastCheck:
    ratio = contrast_ratio(foreground, background)
    aa = WCAG_STANDARDS["AA_LARGE"] if is_large_text else WCAG_STANDARDS["AA_NORMAL"]
    aaa = WCAG_STANDARDS["AAA_LARGE"] if is_large_text else WCAG_STANDARDS["AAA_NORMAL"]
    return ContrastCheck(
        foreground=foreground,
        background=background,
        ratio=ratio,
        meets_aa=ratio >= aa,
        meets_aaa=ratio >= aaa,
        context=context,
    )


def validate_resume_contrast(html: str) -> ContrastReport:
    """Check every non-white color in ``html`` as text on white and as a
    background under white text.

    ``passed`` is True when no check fails AA.
    """
    checks: List[ContrastCheck] = []
    warnings: List[str] = []

    for color in extract_hex_colors(html):
        normalized = normalize_hex(color)
        if normalized is None:
            message = f"Skipping unparseable color {color}"
            logger.warning(f"[Contrast] {message}")
            warnings.append(message)
            continue
        if normalized == WHITE:
            continue
        try:
            checks.append(check_pair(color, WHITE, f"{color} text on white background"))
            checks.append(check_pair(WHITE, color, f"White text on {color} background"))
        except ValueError as e:
            logger.warning(f"[Contrast] Failed to validate {color}: {e}")
            warnings.append(str(e))

    passed_aa = sum(1 for c in checks if c.meets_aa)
    passed_aaa = sum(1 for c in checks if c.meets_aaa)
    failed_aa = len(checks) - passed_aa

    return ContrastReport(
        passed=failed_aa == 0,
        checks=checks,
        summary={
            "total_checks": len(checks),
            "passed_aa": passed_aa,
            "passed_aaa": passed_aaa,
            "failed_aa": failed_aa,
        },
        warnings=warnings,
    )


def safe_alternative_color(failed_color: str, background: str = WHITE) -> str:
    """First professional color that meets AA on ``background``."""
    for color in SAFE_COLORS:
        if color.lower() != (normalize_hex(failed_color) or "") and meets_aa(color, background):
            return color
    return "#1a1a1a"
