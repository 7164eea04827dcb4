"""Tests for generation prompt building."""

import pytest

from resume_designer.palettes import ACCENT_COLOR_MAP, NEUTRAL_COLORS, WCAG_SAFE_PALETTE
from resume_designer.prompts import (
    VARIATION_DIRECTIVES,
    DesignPrompt,
    QuestionnaireAnswers,
    build_questionnaire_prompt,
    build_template_prompt,
    variation_directive,
)
from resume_designer.templates import DESIGN_TEMPLATES


class TestTemplatePrompt:
    def test_embeds_exact_layout_values(self, sample_resume):
        prompt = build_template_prompt(DESIGN_TEMPLATES[0], sample_resume)
        text = prompt.user_prompt
        assert "padding: 0.5in 0.6in;" in text
        assert "0.5in top/bottom, 0.6in left/right" in text
        assert "line-height: 1.4;" in text
        assert "li { margin-bottom: 3px; }" in text
        assert "8.5in x 11in" in text

    def test_closed_color_list(self, sample_resume):
        template = DESIGN_TEMPLATES[3]
        text = build_template_prompt(template, sample_resume).user_prompt
        allowed_line = next(line for line in text.splitlines() if line.startswith("- Allowed:"))
        assert template.accent_color in allowed_line
        for color in NEUTRAL_COLORS:
            assert color in allowed_line

    def test_contains_resume_and_template(self, sample_resume):
        template = DESIGN_TEMPLATES[0]
        prompt = build_template_prompt(template, sample_resume)
        assert sample_resume in prompt.user_prompt
        assert f'"{template.name}"' in prompt.user_prompt
        assert template.heading_font in prompt.user_prompt
        assert '{"html"' in prompt.system_prompt


class TestQuestionnairePrompt:
    def test_variation_directives_differ_per_candidate(self, sample_resume):
        answers = QuestionnaireAnswers(style="professional", accent_color="navy")
        prompts = [build_questionnaire_prompt(answers, sample_resume, i).user_prompt for i in range(3)]
        assert len(set(prompts)) == 3
        for i, text in enumerate(prompts):
            assert VARIATION_DIRECTIVES[i] in text

    def test_directives_cycle(self):
        assert variation_directive(len(VARIATION_DIRECTIVES)) == VARIATION_DIRECTIVES[0]

    def test_safe_palette_and_accent(self, sample_resume):
        answers = QuestionnaireAnswers(accent_color="teal")
        text = build_questionnaire_prompt(answers, sample_resume).user_prompt
        allowed_line = next(line for line in text.splitlines() if line.startswith("- Allowed:"))
        assert ACCENT_COLOR_MAP["teal"] in allowed_line
        for color in WCAG_SAFE_PALETTE:
            assert color in allowed_line
        assert "NO colored backgrounds" in text

    def test_picture_request_is_declined(self, sample_resume):
        answers = QuestionnaireAnswers(include_picture=True)
        text = build_questionnaire_prompt(answers, sample_resume).user_prompt
        assert "images are not allowed" in text


class TestQuestionnaireAnswers:
    def test_accent_hex(self):
        assert QuestionnaireAnswers(accent_color="purple").accent_hex == "#7c3aed"

    @pytest.mark.parametrize("style,expected", [("minimalist", "minimal"), ("tech", "modern"), ("professional", "classic")])
    def test_to_template_maps_style(self, style, expected):
        template = QuestionnaireAnswers(style=style, accent_color="green").to_template()
        assert template.style == expected
        assert template.accent_color == "#047857"
        assert template.name == f"Custom {style.title()}"

    def test_sidebar_layout(self):
        assert QuestionnaireAnswers(layout="sidebar").to_template().has_sidebar

    def test_unknown_accent(self):
        with pytest.raises(ValueError, match="accent"):
            QuestionnaireAnswers(accent_color="chartreuse")

    def test_unknown_style(self):
        with pytest.raises(ValueError, match="style"):
            QuestionnaireAnswers(style="grunge")


class TestFeedback:
    def test_with_feedback_appends_reason(self):
        prompt = DesignPrompt(system_prompt="sys", user_prompt="base")
        retry = prompt.with_feedback("Unauthorized colors: #ff0000")
        assert retry.user_prompt.startswith("base")
        assert "Unauthorized colors: #ff0000" in retry.user_prompt
        assert retry.system_prompt == "sys"
        assert prompt.user_prompt == "base"
