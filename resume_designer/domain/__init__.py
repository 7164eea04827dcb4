"""Resume Designer Domain - Pure functions over design HTML.

No network, file system or generator dependencies: contrast checks, ATS
heuristics and the CSS normalizer all operate on strings.
"""

from .ats import ATSIssue, ATSReport, ats_recommendations, format_ats_report, validate_ats_compatibility
from .contrast import (
    WCAG_STANDARDS,
    ContrastCheck,
    ContrastReport,
    contrast_ratio,
    extract_hex_colors,
    hex_to_rgb,
    meets_aa,
    meets_aaa,
    normalize_hex,
    relative_luminance,
    safe_alternative_color,
    validate_resume_contrast,
)
from .css_normalizer import canonical_stylesheet, capture_font, is_font_import, normalize_design_html, strip_images

__all__ = [
    # Contrast
    "WCAG_STANDARDS",
    "ContrastCheck",
    "ContrastReport",
    "contrast_ratio",
    "extract_hex_colors",
    "hex_to_rgb",
    "meets_aa",
    "meets_aaa",
    "normalize_hex",
    "relative_luminance",
    "safe_alternative_color",
    "validate_resume_contrast",
    # ATS
    "ATSIssue",
    "ATSReport",
    "ats_recommendations",
    "format_ats_report",
    "validate_ats_compatibility",
    # CSS normalizer
    "canonical_stylesheet",
    "capture_font",
    "is_font_import",
    "normalize_design_html",
    "strip_images",
]
