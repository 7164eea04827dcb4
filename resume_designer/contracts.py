"""Request and response contracts for callers of the design pipeline."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .palettes import ACCENT_COLOR_MAP
from .prompts import QuestionnaireAnswers

DesignMode = Literal["template", "questionnaire"]


class QuestionnairePayload(BaseModel):
    style: Literal["modern", "classic", "creative", "minimalist", "professional", "tech"] = "modern"
    layout: str = Field(default="single")
    accent_color: str = Field(default="blue")
    header_style: str = Field(default="left")
    font_pairing: str = Field(default="modern-sans")
    section_dividers: str = Field(default="lines")
    color_scheme: str = Field(default="professional")
    emphasis_on: str = Field(default="balanced")
    contact_info_placement: str = Field(default="header")
    include_picture: bool = Field(default=False)

    @model_validator(mode="after")
    def _known_accent(self) -> "QuestionnairePayload":
        if self.accent_color not in ACCENT_COLOR_MAP:
            raise ValueError(f"accent_color must be one of: {', '.join(ACCENT_COLOR_MAP)}")
        return self

    def to_answers(self) -> QuestionnaireAnswers:
        return QuestionnaireAnswers(**self.model_dump())


class DesignRequest(BaseModel):
    resume_text: str = Field(min_length=1)
    mode: DesignMode = "template"
    count: int = Field(default=3, ge=1, le=10)
    template_name: Optional[str] = None
    questionnaire: Optional[QuestionnairePayload] = None

    @model_validator(mode="after")
    def _mode_inputs(self) -> "DesignRequest":
        if self.mode == "questionnaire" and self.questionnaire is None:
            raise ValueError("questionnaire mode requires questionnaire answers")
        if self.mode == "template" and self.questionnaire is not None:
            raise ValueError("questionnaire answers are only accepted in questionnaire mode")
        return self


class ATSIssueModel(BaseModel):
    type: str
    message: str
    severity: Literal["high", "medium", "low"]


class DesignPreviewModel(BaseModel):
    template_name: str
    template_style: str
    layout: str
    accent_color: str
    html: str
    contrast_passed: bool
    contrast_summary: dict[str, int]
    ats_score: int = Field(ge=0, le=100)
    ats_warnings: list[str]
    ats_issues: list[ATSIssueModel]


class DesignPreviewsResponse(BaseModel):
    designs: list[DesignPreviewModel]
    requested: int


class DesignResponse(BaseModel):
    design: DesignPreviewModel
