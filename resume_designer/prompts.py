"""Prompt builder for design generation.

Turns a template (or a questionnaire) plus resume text into system and user
prompts with exact numeric layout constraints and a closed color list.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List

from .palettes import ACCENT_COLOR_MAP, NEUTRAL_COLORS, WCAG_SAFE_PALETTE
from .templates import DesignTemplate

LAYOUT_CONSTRAINTS: Dict[str, str] = {
    "page_size": "8.5in x 11in (US letter), full width, no max-width, no 'margin: 0 auto'",
    "body_padding": "padding: 0.5in 0.6in; (0.5in top/bottom, 0.6in left/right)",
    "line_height": "line-height: 1.4;",
    "list_item_spacing": "li { margin-bottom: 3px; } (3-4px between list items)",
    "section_header_margin": "h2 { margin: 14px 0 8px; }",
    "name_size": "28px",
    "section_header_size": "14px",
    "body_size": "11px",
}

VARIATION_DIRECTIVES: List[str] = [
    "VARIATION A - Conservative: plain section headers with a thin accent underline, "
    "no icons, generous use of whitespace.",
    "VARIATION B - Icon-accented: small text-based icons (✉ ☎ ⌂) before contact details "
    "and accent-colored section header text, still single column.",
    "VARIATION C - Bordered: a 3px accent-colored left border on each section and "
    "bold company names, compact spacing.",
    "VARIATION D - Compact: tighter line spacing within the limits above, skills listed "
    "inline separated by vertical bars.",
]

STYLE_DESCRIPTIONS: Dict[str, str] = {
    "modern": "modern, clean, contemporary design with sharp lines and ample white space",
    "classic": "classic, traditional, timeless design with serif fonts and balanced proportions",
    "creative": "creative, bold design with distinctive typography and dynamic section styling",
    "minimalist": "minimalist, simple, elegant design with maximum white space and minimal decoration",
    "professional": "professional, corporate, polished design with conservative styling",
    "tech": "tech-inspired, sleek design with geometric elements and modern aesthetics",
}

# Questionnaire styles map onto the template style vocabulary.
QUESTIONNAIRE_STYLE_TO_TEMPLATE: Dict[str, str] = {
    "modern": "modern",
    "classic": "classic",
    "creative": "creative",
    "minimalist": "minimal",
    "professional": "classic",
    "tech": "modern",
}

LAYOUT_DESCRIPTIONS: Dict[str, str] = {
    "single": "single column layout with traditional linear flow",
    "two-column": "two column layout with split content sections",
    "sidebar": "sidebar layout with main content area and dedicated side panel",
    "asymmetric": "asymmetric layout with uneven column widths",
}

HEADER_DESCRIPTIONS: Dict[str, str] = {
    "centered": "centered header with name and title in the middle",
    "left": "left-aligned header",
    "banner": "full-width header separated by an accent-colored rule (white background)",
    "split": "split header with name on the left and contact information on the right",
}

FONT_DESCRIPTIONS: Dict[str, str] = {
    "classic-serif": "classic serif fonts like Georgia or Garamond",
    "modern-sans": "modern sans-serif fonts like Helvetica or Inter",
    "tech": "geometric fonts like Montserrat or Roboto",
    "creative": "distinctive fonts like Playfair Display or Lora",
    "minimal": "simple fonts like Source Sans Pro or Open Sans",
}

DIVIDER_DESCRIPTIONS: Dict[str, str] = {
    "lines": "horizontal dividing lines between sections",
    "spacing": "white space only for section separation, no lines",
    "icons": "text-based section icons next to titles",
    "colored": "accent-colored rules between sections",
    "none": "minimal separation with no visible dividers",
}

COLOR_SCHEME_DESCRIPTIONS: Dict[str, str] = {
    "bold": "bold use of the accent color on headers and rules",
    "subtle": "sparing use of the accent color",
    "monochrome": "near-monochrome: accent only on section header text",
    "colorful": "the accent color on headers, rules and links",
    "professional": "a conservative palette with minimal color",
}

EMPHASIS_DESCRIPTIONS: Dict[str, str] = {
    "skills": "Give the skills section the most prominence",
    "experience": "Give work experience the most prominence with detailed formatting",
    "education": "Give the education section the most prominence",
    "projects": "Give the projects section the most prominence",
    "balanced": "Give balanced emphasis to all sections",
}

CONTACT_DESCRIPTIONS: Dict[str, str] = {
    "header": "Place contact information in the header at the top of the page",
    "sidebar": "Place contact information in the side panel",
    "footer": "Place contact information at the bottom of the page",
    "integrated": "Integrate contact information with the name and title",
}

JSON_CONTRACT = 'Return ONLY valid JSON: {"html": "<!DOCTYPE html><html>...</html>"}'

DESIGNER_SYSTEM_PROMPT = (
    "You are a professional resume designer. You produce complete, print-ready HTML resumes "
    "with all CSS in a single <style> tag. You follow numeric layout constraints and color "
    "lists exactly. " + JSON_CONTRACT
)


@dataclass(frozen=True)
class DesignPrompt:
    system_prompt: str
    user_prompt: str

    def with_feedback(self, reason: str) -> "DesignPrompt":
        """Prompt for a retry that tells the generator why the last attempt was rejected."""
        feedback = (
            "\n\nYOUR PREVIOUS RESPONSE WAS REJECTED: "
            f"{reason}\nFix this problem and return the complete design again. {JSON_CONTRACT}"
        )
        return replace(self, user_prompt=self.user_prompt + feedback)


def _layout_block() -> str:
    c = LAYOUT_CONSTRAINTS
    return f"""LAYOUT (EXACT VALUES):
- Page: {c['page_size']}
- Body padding: {c['body_padding']}
- Body text: {c['body_size']}, {c['line_height']}
- Name (h1): {c['name_size']}; section headers (h2): {c['section_header_size']}, {c['section_header_margin']}
- List items: {c['list_item_spacing']}
- @page {{ size: 8.5in 11in; margin: 0.5in 0.6in; }}"""


def _ats_block() -> str:
    return """ATS RULES:
- Standard section headers: "Professional Summary", "Work Experience", "Skills", "Education"
- Semantic HTML: <header>, <section>, <h1>, <h2>, <ul>, <li>
- NO tables, NO images, NO <svg>, NO absolute positioning
- Achievements as <li> bullet points; one consistent date format
- Keep ALL resume content, including email and phone"""


def _color_block(colors: List[str]) -> str:
    listed = ", ".join(colors)
    return f"""COLORS (CLOSED LIST - ANY OTHER HEX VALUE IS REJECTED):
- Allowed: {listed}
- Do not use any other hex color, not even in gradients, borders or shadows"""


def template_colors(template: DesignTemplate) -> List[str]:
    return [template.accent_color, *NEUTRAL_COLORS]


def build_template_prompt(template: DesignTemplate, resume_text: str) -> DesignPrompt:
    """Prompt for one candidate in template mode."""
    sidebar = ""
    if template.has_sidebar:
        sidebar = (
            f"\n- Layout: {template.layout} with a {template.sidebar} sidebar (35% width) whose background "
            f"uses the accent color {template.accent_color} (optionally blended with #1a1a1a), white text"
        )
    else:
        sidebar = f"\n- Layout: {template.layout}"

    user_prompt = f"""Design a resume using the "{template.name}" template.

TEMPLATE: {template.name} ({template.style})
- {template.description}{sidebar}
- Accent color: {template.accent_color} for headers, rules and highlights
- Fonts: '{template.heading_font}' (headers), '{template.body_font}' (body), Google Fonts @import allowed

{_layout_block()}

{_color_block(template_colors(template))}

{_ats_block()}

RESUME CONTENT:
{resume_text}

{JSON_CONTRACT}"""
    return DesignPrompt(system_prompt=DESIGNER_SYSTEM_PROMPT, user_prompt=user_prompt)


@dataclass
class QuestionnaireAnswers:
    """A user's answers to the design questionnaire."""

    style: str = "modern"
    layout: str = "single"
    accent_color: str = "blue"
    header_style: str = "left"
    font_pairing: str = "modern-sans"
    section_dividers: str = "lines"
    color_scheme: str = "professional"
    emphasis_on: str = "balanced"
    contact_info_placement: str = "header"
    include_picture: bool = False

    def __post_init__(self) -> None:
        if self.accent_color not in ACCENT_COLOR_MAP:
            raise ValueError(
                f"Unknown accent color '{self.accent_color}'. Expected one of: {', '.join(ACCENT_COLOR_MAP)}"
            )
        if self.style not in STYLE_DESCRIPTIONS:
            raise ValueError(f"Unknown style '{self.style}'. Expected one of: {', '.join(STYLE_DESCRIPTIONS)}")

    @property
    def accent_hex(self) -> str:
        return ACCENT_COLOR_MAP[self.accent_color]

    def to_template(self) -> DesignTemplate:
        """The template record a questionnaire design is reported under."""
        return DesignTemplate(
            name=f"Custom {self.style.title()}",
            style=QUESTIONNAIRE_STYLE_TO_TEMPLATE[self.style],
            layout=self.layout,
            sidebar="left" if self.layout == "sidebar" else "none",
            gradient="none",
            accent_color=self.accent_hex,
            fonts=(self.font_pairing, self.font_pairing),
            description=STYLE_DESCRIPTIONS[self.style],
        )


def questionnaire_colors(answers: QuestionnaireAnswers) -> List[str]:
    return [answers.accent_hex, *WCAG_SAFE_PALETTE]


def variation_directive(index: int) -> str:
    return VARIATION_DIRECTIVES[index % len(VARIATION_DIRECTIVES)]


def build_questionnaire_prompt(
    answers: QuestionnaireAnswers,
    resume_text: str,
    variant_index: int = 0,
) -> DesignPrompt:
    """Prompt for candidate ``variant_index`` of a questionnaire batch.

    Each index gets its own variation directive so a batch does not come
    back as near-duplicates.
    """
    picture = "No profile picture." if not answers.include_picture else (
        "The user asked for a picture, but images are not allowed: leave it out."
    )
    user_prompt = f"""Create a {STYLE_DESCRIPTIONS[answers.style]} resume.

DESIGN SPECIFICATIONS:
- Layout: {LAYOUT_DESCRIPTIONS.get(answers.layout, answers.layout)}
- Header: {HEADER_DESCRIPTIONS.get(answers.header_style, answers.header_style)}
- Fonts: {FONT_DESCRIPTIONS.get(answers.font_pairing, answers.font_pairing)}
- Section dividers: {DIVIDER_DESCRIPTIONS.get(answers.section_dividers, answers.section_dividers)}
- Color usage: {COLOR_SCHEME_DESCRIPTIONS.get(answers.color_scheme, answers.color_scheme)}
- Accent color: {answers.accent_hex} ({answers.accent_color})
- Contact info: {CONTACT_DESCRIPTIONS.get(answers.contact_info_placement, answers.contact_info_placement)}
- Emphasis: {EMPHASIS_DESCRIPTIONS.get(answers.emphasis_on, answers.emphasis_on)}
- Picture: {picture}

{variation_directive(variant_index)}

{_layout_block()}

{_color_block(questionnaire_colors(answers))}
- Headings #1a1a1a, body text #333333, dates and metadata #595959
- The accent color is for h2 text and h2 borders ONLY

BACKGROUNDS (STRICT):
- Only "background: white", "#ffffff", "transparent" or "none" are allowed
- NO colored backgrounds on any element: no banners, no colored boxes, no colored headers

{_ats_block()}

RESUME CONTENT:
{resume_text}

{JSON_CONTRACT}"""
    return DesignPrompt(system_prompt=DESIGNER_SYSTEM_PROMPT, user_prompt=user_prompt)
