"""Closed color lists shared by the prompt builder and the color policy."""

from __future__ import annotations

from typing import Dict, List

# Neutrals allowed next to a template's accent color.
NEUTRAL_COLORS: List[str] = [
    "#ffffff",
    "#fff",
    "#1a1a1a",
    "#2d2d2d",
    "#333333",
    "#666666",
    "#999999",
    "#cccccc",
    "#f5f5f5",
    "#f0f0f0",
    "#000000",
    "#000",
]

# Text colors for questionnaire designs; every one passes AA on white.
WCAG_SAFE_PALETTE: List[str] = [
    "#1a1a1a",  # headings, 17.40:1
    "#333333",  # body, 12.63:1
    "#595959",  # metadata, 7.00:1
    "#ffffff",
    "#fff",
]

# Questionnaire accent choices, all WCAG AA on white.
ACCENT_COLOR_MAP: Dict[str, str] = {
    "blue": "#1d4ed8",
    "purple": "#7c3aed",
    "green": "#047857",
    "red": "#b91c1c",
    "orange": "#c2410c",
    "navy": "#1e3a8a",
    "teal": "#0f766e",
    "black": "#1a1a1a",
}

# Background values the structural check accepts. ``url(``, ``linear-gradient(``
# and white ``rgba(255,255,255,*)`` are matched by prefix in the policy.
ALLOWED_BACKGROUND_KEYWORDS = ("white", "#fff", "#ffffff", "transparent", "none", "inherit")
