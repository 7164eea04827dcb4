"""Runs candidate pipelines concurrently and turns accepted ones into previews."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..domain.ats import ATSIssue, validate_ats_compatibility
from ..domain.contrast import validate_resume_contrast
from ..domain.css_normalizer import normalize_design_html
from ..errors import AllCandidatesFailed
from ..observability import DesignObserver
from ..prompts import QuestionnaireAnswers, build_questionnaire_prompt, build_template_prompt
from ..providers.base import GenerationClient
from ..retry import RetryPolicy
from ..templates import DesignTemplate, TemplateCatalog
from .chain import (
    CandidateState,
    GenerationCandidate,
    ValidationChain,
    ValidationProfile,
    questionnaire_profile,
    template_profile,
)

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_COUNT = 3

_SUMMARY_KEYS = {
    "total_checks": "totalChecks",
    "passed_aa": "passedAA",
    "passed_aaa": "passedAAA",
    "failed_aa": "failedAA",
}


@dataclass(frozen=True)
class DesignPreview:
    """A normalized design ready to hand to the caller."""

    template_name: str
    template_style: str
    layout: str
    accent_color: str
    html: str
    contrast_passed: bool
    contrast_summary: Mapping[str, int]
    ats_score: int
    ats_warnings: Tuple[str, ...] = ()
    ats_issues: Tuple[ATSIssue, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "templateName": self.template_name,
            "templateStyle": self.template_style,
            "layout": self.layout,
            "accentColor": self.accent_color,
            "html": self.html,
            "contrastPassed": self.contrast_passed,
            "contrastSummary": {
                _SUMMARY_KEYS.get(key, key): value for key, value in self.contrast_summary.items()
            },
            "atsScore": self.ats_score,
            "atsWarnings": list(self.ats_warnings),
            "atsIssues": [
                {"type": issue.type, "message": issue.message, "severity": issue.severity}
                for issue in self.ats_issues
            ],
        }


def build_preview(candidate: GenerationCandidate) -> DesignPreview:
    """Normalize an accepted candidate and attach its contrast and ATS reports."""
    if not candidate.accepted or candidate.html is None:
        raise ValueError(f"Candidate {candidate.label} is not accepted")

    template = candidate.template
    html = normalize_design_html(candidate.html, template.accent_color)
    contrast = validate_resume_contrast(html)
    ats = validate_ats_compatibility(html)
    return DesignPreview(
        template_name=template.name,
        template_style=template.style,
        layout=template.layout,
        accent_color=template.accent_color,
        html=html,
        contrast_passed=contrast.passed,
        contrast_summary=MappingProxyType(dict(contrast.summary)),
        ats_score=ats.score,
        ats_warnings=tuple(ats.warnings),
        ats_issues=tuple(ats.issues),
    )


class DesignOrchestrator:
    """
    Generates a batch of designs for one resume.

    Every candidate runs its own :class:`ValidationChain` as a separate task.
    The batch fails with :class:`AllCandidatesFailed` only when no candidate
    is accepted; otherwise the accepted subset is returned in request order.
    """

    def __init__(
        self,
        client: GenerationClient,
        catalog: Optional[TemplateCatalog] = None,
        retry_policy: Optional[RetryPolicy] = None,
        observer: Optional[DesignObserver] = None,
        deadline_seconds: Optional[float] = None,
        candidate_count: int = DEFAULT_CANDIDATE_COUNT,
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.catalog = catalog or TemplateCatalog()
        self.retry_policy = retry_policy or RetryPolicy()
        self.observer = observer or DesignObserver()
        self.deadline_seconds = deadline_seconds
        self.candidate_count = candidate_count
        self.rng = rng

    async def preview_designs(self, resume_text: str, count: Optional[int] = None) -> List[DesignPreview]:
        """Template mode: ``count`` distinct random templates, one candidate each."""
        count = count if count is not None else self.candidate_count
        if count < 1:
            raise ValueError("count must be at least 1")

        templates = await self.catalog.random_selection(count, rng=self.rng)
        jobs = [
            (GenerationCandidate(template, build_template_prompt(template, resume_text)), template_profile(template))
            for template in templates
        ]
        return await self._run_batch(jobs)

    async def generate_design(self, resume_text: str, template_name: Optional[str] = None) -> DesignPreview:
        """Single-result flow with a named template, or a random one."""
        template = await self._resolve_template(template_name)
        candidate = GenerationCandidate(template, build_template_prompt(template, resume_text))
        previews = await self._run_batch([(candidate, template_profile(template))])
        return previews[0]

    async def questionnaire_designs(
        self,
        resume_text: str,
        answers: QuestionnaireAnswers,
        count: Optional[int] = None,
    ) -> List[DesignPreview]:
        """Questionnaire mode: ``count`` variations of one set of answers."""
        count = count if count is not None else self.candidate_count
        if count < 1:
            raise ValueError("count must be at least 1")

        template = answers.to_template()
        profile = questionnaire_profile(answers.accent_hex)
        jobs = [
            (
                GenerationCandidate(
                    template,
                    build_questionnaire_prompt(answers, resume_text, variant_index=i),
                    label=f"{template.name} #{i + 1}",
                ),
                profile,
            )
            for i in range(count)
        ]
        return await self._run_batch(jobs)

    async def _resolve_template(self, template_name: Optional[str]) -> DesignTemplate:
        if not template_name:
            return (await self.catalog.random_selection(1, rng=self.rng))[0]
        template = await self.catalog.get(template_name)
        if template is None:
            raise ValueError(f"Unknown template '{template_name}'")
        return template

    async def _run_batch(self, jobs: Sequence[Tuple[GenerationCandidate, ValidationProfile]]) -> List[DesignPreview]:
        start = time.monotonic()
        tasks = [
            asyncio.create_task(ValidationChain(self.client, profile, self.retry_policy, self.observer).run(candidate))
            for candidate, profile in jobs
        ]

        done, pending = await asyncio.wait(tasks, timeout=self.deadline_seconds)
        if pending:
            logger.warning(f"Deadline of {self.deadline_seconds}s reached; cancelling {len(pending)} candidate(s)")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        previews: List[DesignPreview] = []
        rejections: Dict[str, str] = {}
        for task, (candidate, _) in zip(tasks, jobs):
            if task in pending:
                candidate.transition(CandidateState.REJECTED)
                self.observer.log_candidate(candidate.label, candidate.state.value, candidate.attempts_used)
                rejections[candidate.label] = "deadline exceeded"
                continue

            candidate = task.result()
            if candidate.accepted:
                previews.append(build_preview(candidate))
            else:
                rejections[candidate.label] = candidate.rejection_reason

        self.observer.log_batch(len(jobs), len(previews), (time.monotonic() - start) * 1000)
        if not previews:
            raise AllCandidatesFailed(rejections)
        return previews
