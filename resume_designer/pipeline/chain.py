"""Per-candidate validation state machine.

Each attempt walks::

    REQUESTED -> GENERATION_FAILED | GENERATED
              -> PARSE_FAILED | PARSED
              -> STRUCTURAL_REJECTED | STRUCTURAL_OK
              -> COLOR_REJECTED | COLOR_OK
              -> ACCEPTED

A failed step ends the attempt. The candidate is retried with a feedback
prompt until the retry policy runs out, at which point it is ``REJECTED``.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..errors import (
    AttemptsExhausted,
    ColorPolicyViolation,
    MalformedResponseError,
    RetryableDesignError,
    StructuralPolicyViolation,
    TransportError,
)
from ..observability import DesignObserver
from ..palettes import NEUTRAL_COLORS, WCAG_SAFE_PALETTE
from ..prompts import DesignPrompt
from ..providers.base import GenerationClient
from ..retry import RetryPolicy
from ..templates import DesignTemplate
from .policy import find_forbidden_backgrounds, find_unauthorized_colors, parse_design_response

logger = logging.getLogger(__name__)


class CandidateState(str, Enum):
    REQUESTED = "REQUESTED"
    GENERATION_FAILED = "GENERATION_FAILED"
    GENERATED = "GENERATED"
    PARSE_FAILED = "PARSE_FAILED"
    PARSED = "PARSED"
    STRUCTURAL_REJECTED = "STRUCTURAL_REJECTED"
    STRUCTURAL_OK = "STRUCTURAL_OK"
    COLOR_REJECTED = "COLOR_REJECTED"
    COLOR_OK = "COLOR_OK"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class ValidationProfile:
    """Which checks apply and which colors are allowed."""

    name: str
    allowed_colors: Tuple[str, ...]
    check_backgrounds: bool = False


def template_profile(template: DesignTemplate) -> ValidationProfile:
    """Template mode: the template's accent plus fixed neutrals, any background."""
    return ValidationProfile(
        name="template",
        allowed_colors=(template.accent_color, *NEUTRAL_COLORS),
        check_backgrounds=False,
    )


def questionnaire_profile(accent_color: str) -> ValidationProfile:
    """Questionnaire mode: the WCAG-safe palette plus the chosen accent, white backgrounds only."""
    return ValidationProfile(
        name="questionnaire",
        allowed_colors=(accent_color.lower(), *WCAG_SAFE_PALETTE),
        check_backgrounds=True,
    )


@dataclass
class GenerationCandidate:
    """One design slot in a batch; lives for a single pipeline run."""

    template: DesignTemplate
    prompt: DesignPrompt
    label: str = ""
    attempts_used: int = 0
    raw_response: Optional[str] = None
    state: CandidateState = CandidateState.REQUESTED
    html: Optional[str] = None
    history: List[CandidateState] = field(default_factory=list)
    last_error: Optional[RetryableDesignError] = None
    rejection: Optional[AttemptsExhausted] = None

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.template.name

    def transition(self, state: CandidateState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def accepted(self) -> bool:
        return self.state is CandidateState.ACCEPTED

    @property
    def rejection_reason(self) -> str:
        if self.rejection is not None:
            return str(self.rejection)
        if self.last_error is not None:
            return self.last_error.reason
        return self.state.value


class ValidationChain:
    """Drives one candidate to ``ACCEPTED`` or ``REJECTED``."""

    def __init__(
        self,
        client: GenerationClient,
        profile: ValidationProfile,
        retry_policy: Optional[RetryPolicy] = None,
        observer: Optional[DesignObserver] = None,
    ):
        self.client = client
        self.profile = profile
        self.retry_policy = retry_policy or RetryPolicy()
        self.observer = observer or DesignObserver()

    async def run(self, candidate: GenerationCandidate) -> GenerationCandidate:
        prompt = candidate.prompt

        while True:
            candidate.attempts_used += 1
            attempt = candidate.attempts_used
            candidate.transition(CandidateState.REQUESTED)
            start = time.monotonic()

            try:
                html = await self._attempt(candidate, prompt)
            except RetryableDesignError as error:
                candidate.last_error = error
                self.observer.log_attempt(
                    candidate.label,
                    attempt,
                    candidate.state.value,
                    reason=error.reason,
                    duration_ms=(time.monotonic() - start) * 1000,
                )
                if not self.retry_policy.should_retry(attempt):
                    break
                await self.retry_policy.wait(attempt)
                prompt = candidate.prompt.with_feedback(error.reason)
                continue

            candidate.html = html
            candidate.transition(CandidateState.ACCEPTED)
            self.observer.log_attempt(
                candidate.label, attempt, candidate.state.value, duration_ms=(time.monotonic() - start) * 1000
            )
            self.observer.log_candidate(candidate.label, candidate.state.value, candidate.attempts_used)
            return candidate

        candidate.rejection = AttemptsExhausted(candidate.label, candidate.attempts_used, candidate.last_error)
        candidate.transition(CandidateState.REJECTED)
        self.observer.log_candidate(candidate.label, candidate.state.value, candidate.attempts_used)
        return candidate

    async def _attempt(self, candidate: GenerationCandidate, prompt: DesignPrompt) -> str:
        """Run one attempt; returns the accepted HTML or raises a retryable error."""
        try:
            raw = await self.client.generate(prompt.system_prompt, prompt.user_prompt)
        except Exception as error:
            candidate.transition(CandidateState.GENERATION_FAILED)
            if isinstance(error, TransportError):
                raise
            raise TransportError(f"{type(error).__name__}: {error}") from error
        candidate.raw_response = raw
        candidate.transition(CandidateState.GENERATED)

        try:
            html = parse_design_response(raw)
        except MalformedResponseError:
            candidate.transition(CandidateState.PARSE_FAILED)
            raise
        candidate.transition(CandidateState.PARSED)

        if self.profile.check_backgrounds:
            forbidden = find_forbidden_backgrounds(html)
            if forbidden:
                candidate.transition(CandidateState.STRUCTURAL_REJECTED)
                raise StructuralPolicyViolation(forbidden)
        candidate.transition(CandidateState.STRUCTURAL_OK)

        unauthorized = find_unauthorized_colors(html, self.profile.allowed_colors)
        if unauthorized:
            candidate.transition(CandidateState.COLOR_REJECTED)
            raise ColorPolicyViolation(unauthorized)
        candidate.transition(CandidateState.COLOR_OK)

        return html
