"""Design template catalog: curated templates plus remotely fetched ones."""

from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from ..cache import TTLCache

logger = logging.getLogger(__name__)

TEMPLATE_STYLES = ("classic", "minimal", "modern", "creative")

_HEX6_RE = re.compile(r"#[0-9a-fA-F]{6}")


@dataclass(frozen=True)
class DesignTemplate:
    """A named bundle of style, layout, color and font metadata."""

    name: str
    style: str
    layout: str
    sidebar: str
    gradient: str
    accent_color: str
    fonts: Tuple[str, str]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Template name must not be empty")
        if self.style not in TEMPLATE_STYLES:
            raise ValueError(f"Unknown template style '{self.style}'. Expected one of: {', '.join(TEMPLATE_STYLES)}")
        if not isinstance(self.accent_color, str) or not _HEX6_RE.fullmatch(self.accent_color):
            raise ValueError(f"accent_color must be a 6-digit hex color, got {self.accent_color!r}")
        fonts = tuple(self.fonts)
        if len(fonts) != 2 or not all(isinstance(f, str) and f for f in fonts):
            raise ValueError("fonts must be exactly [heading, body]")
        # frozen: go through object.__setattr__ to store normalized values
        object.__setattr__(self, "accent_color", self.accent_color.lower())
        object.__setattr__(self, "fonts", fonts)

    @property
    def heading_font(self) -> str:
        return self.fonts[0]

    @property
    def body_font(self) -> str:
        return self.fonts[1]

    @property
    def has_sidebar(self) -> bool:
        return self.sidebar not in ("", "none")

    @property
    def has_gradient(self) -> bool:
        return self.gradient not in ("", "none")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesignTemplate":
        """Build a template from a camelCase or snake_case mapping.

        Raises:
            ValueError: if a field is missing or fails validation
        """
        accent = data.get("accentColor", data.get("accent_color"))
        fonts = data.get("fonts") or ()
        try:
            return cls(
                name=str(data["name"]),
                style=str(data["style"]),
                layout=str(data.get("layout") or "single-column"),
                sidebar=str(data.get("sidebar") or "none"),
                gradient=str(data.get("gradient") or "none"),
                accent_color=accent,
                fonts=tuple(fonts),
                description=str(data.get("description") or ""),
            )
        except KeyError as e:
            raise ValueError(f"Template is missing required field {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "style": self.style,
            "layout": self.layout,
            "sidebar": self.sidebar,
            "gradient": self.gradient,
            "accentColor": self.accent_color,
            "fonts": list(self.fonts),
            "description": self.description,
        }


def _sidebar_template(name, style, gradient_from, gradient_to, accent, fonts, description) -> DesignTemplate:
    return DesignTemplate(
        name=name,
        style=style,
        layout="2-column",
        sidebar="left",
        gradient=f"linear-gradient(135deg, {gradient_from} 0%, {gradient_to} 100%)",
        accent_color=accent,
        fonts=fonts,
        description=description,
    )


DESIGN_TEMPLATES: List[DesignTemplate] = [
    _sidebar_template("Midnight Professional", "modern", "#1e3a8a", "#312e81", "#3b82f6", ("Playfair Display", "Lato"), "Deep blue gradient sidebar with serif headers"),
    _sidebar_template("Emerald Executive", "modern", "#065f46", "#064e3b", "#10b981", ("Merriweather", "Open Sans"), "Forest green gradient with classic typography"),
    _sidebar_template("Crimson Creative", "creative", "#991b1b", "#7f1d1d", "#ef4444", ("Montserrat", "Raleway"), "Bold red gradient for creative professionals"),
    _sidebar_template("Ocean Breeze", "modern", "#0284c7", "#0369a1", "#38bdf8", ("Poppins", "Inter"), "Bright cyan gradient with modern fonts"),
    _sidebar_template("Violet Vision", "creative", "#6b21a8", "#581c87", "#a78bfa", ("Nunito", "Quicksand"), "Purple gradient with rounded friendly fonts"),
    _sidebar_template("Slate Minimalist", "minimal", "#334155", "#1e293b", "#64748b", ("Inter", "Roboto"), "Gray gradient for understated elegance"),
    _sidebar_template("Sunset Professional", "modern", "#ea580c", "#dc2626", "#fb923c", ("Ubuntu", "Lato"), "Orange-red gradient for bold presence"),
    _sidebar_template("Teal Elegance", "classic", "#0f766e", "#115e59", "#14b8a6", ("Libre Baskerville", "Source Sans Pro"), "Teal gradient with classic serif"),
    _sidebar_template("Rose Gold Luxury", "creative", "#9f1239", "#881337", "#fb7185", ("Cormorant Garamond", "Josefin Sans"), "Rose gradient for sophisticated look"),
    _sidebar_template("Navy Commander", "classic", "#1e40af", "#1e3a8a", "#60a5fa", ("Crimson Text", "Karla"), "Navy blue with traditional elegance"),
    _sidebar_template("Amber Warmth", "modern", "#b45309", "#92400e", "#fbbf24", ("Outfit", "Manrope"), "Warm amber gradient for approachable feel"),
    _sidebar_template("Indigo Innovation", "modern", "#4338ca", "#3730a3", "#818cf8", ("Space Grotesk", "DM Sans"), "Indigo gradient for tech professionals"),
    _sidebar_template("Lime Fresh", "creative", "#4d7c0f", "#3f6212", "#84cc16", ("Sora", "Plus Jakarta Sans"), "Lime green for energetic vibe"),
    _sidebar_template("Fuchsia Bold", "creative", "#a21caf", "#86198f", "#d946ef", ("Epilogue", "Albert Sans"), "Vibrant fuchsia for creative fields"),
    _sidebar_template("Charcoal Modern", "minimal", "#27272a", "#18181b", "#71717a", ("Work Sans", "IBM Plex Sans"), "Dark charcoal for modern minimalism"),
    _sidebar_template("Sky Professional", "modern", "#0369a1", "#075985", "#0ea5e9", ("Barlow", "Rubik"), "Sky blue gradient for corporate"),
    _sidebar_template("Bronze Executive", "classic", "#78350f", "#6b2e0c", "#d97706", ("Spectral", "Cabin"), "Bronze gradient for executive presence"),
    _sidebar_template("Cyan Digital", "modern", "#0e7490", "#155e75", "#06b6d4", ("Archivo", "Hind"), "Bright cyan for digital professionals"),
    _sidebar_template("Plum Sophisticated", "classic", "#7e22ce", "#6b21a8", "#a855f7", ("Lora", "PT Sans"), "Plum purple for sophisticated look"),
    _sidebar_template("Rust Industrial", "modern", "#b91c1c", "#991b1b", "#f87171", ("Oswald", "Oxygen"), "Rust red for industrial strength"),
    _sidebar_template("Mint Clean", "minimal", "#059669", "#047857", "#34d399", ("Assistant", "Mulish"), "Mint green for clean modern look"),
    _sidebar_template("Sapphire Premium", "classic", "#1e40af", "#1e3a8a", "#3b82f6", ("Cardo", "Fira Sans"), "Sapphire blue for premium feel"),
    _sidebar_template("Coral Vibrant", "creative", "#dc2626", "#b91c1c", "#fca5a5", ("Lexend", "Red Hat Display"), "Coral gradient for vibrant energy"),
    _sidebar_template("Steel Professional", "minimal", "#475569", "#334155", "#94a3b8", ("Titillium Web", "Noto Sans"), "Steel gray for professional minimalism"),
    _sidebar_template("Magenta Creative", "creative", "#be185d", "#9f1239", "#ec4899", ("Chakra Petch", "Archivo Narrow"), "Magenta gradient for creative edge"),
]


def select_random_templates(
    catalog: Sequence[DesignTemplate],
    k: int,
    rng: Optional[random.Random] = None,
) -> List[DesignTemplate]:
    """Pick ``k`` distinct templates with a full Fisher-Yates shuffle.

    Nothing is remembered between calls. If ``k`` exceeds the catalog size
    the whole catalog is returned in shuffled order.
    """
    if k < 1:
        raise ValueError("k must be at least 1")
    rng = rng or random.Random()
    shuffled = list(catalog)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled[:k]


class RemoteTemplateSource(Protocol):
    """Anything that can fetch additional templates."""

    async def fetch_templates(self) -> List[DesignTemplate]: ...


class TemplateCatalog:
    """
    Static curated templates extended by an optional remote source.

    Remote templates are cached for ``cache.ttl`` seconds and are strictly
    additive: a failing remote source leaves the static catalog intact.
    """

    def __init__(
        self,
        static: Optional[Sequence[DesignTemplate]] = None,
        remote_source: Optional[RemoteTemplateSource] = None,
        cache: Optional[TTLCache[List[DesignTemplate]]] = None,
    ):
        self.static = list(DESIGN_TEMPLATES if static is None else static)
        self.remote_source = remote_source
        self.cache: TTLCache[List[DesignTemplate]] = cache or TTLCache(ttl_seconds=300)

    async def remote_templates(self) -> List[DesignTemplate]:
        if self.remote_source is None:
            return []
        templates = await self.cache.get_or_refresh(self.remote_source.fetch_templates, fallback=[])
        return list(templates)

    async def all_templates(self) -> List[DesignTemplate]:
        """Remote templates first, then the static catalog, unique by name."""
        seen = set()
        merged: List[DesignTemplate] = []
        for template in [*await self.remote_templates(), *self.static]:
            if template.name in seen:
                continue
            seen.add(template.name)
            merged.append(template)
        return merged

    async def get(self, name: str) -> Optional[DesignTemplate]:
        wanted = name.strip().lower()
        for template in await self.all_templates():
            if template.name.lower() == wanted:
                return template
        return None

    async def random_selection(self, k: int, rng: Optional[random.Random] = None) -> List[DesignTemplate]:
        return select_random_templates(await self.all_templates(), k, rng=rng)

    def invalidate(self) -> None:
        self.cache.invalidate()
