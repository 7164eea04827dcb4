"""Error taxonomy for the design generation pipeline."""

from __future__ import annotations

from typing import Dict, List, Optional


class DesignPipelineError(Exception):
    """Base class for every error raised by the design pipeline."""


class ConfigurationError(DesignPipelineError):
    """Invalid or incomplete configuration (missing API key, bad provider)."""


class RetryableDesignError(DesignPipelineError):
    """A single generation attempt failed and may be retried."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class TransportError(RetryableDesignError):
    """The generation service was unreachable or returned an error."""


class MalformedResponseError(RetryableDesignError):
    """The response body was not JSON or had no string ``html`` field."""


class StructuralPolicyViolation(RetryableDesignError):
    """The design declared a background outside the allowed set."""

    def __init__(self, declarations: List[str]) -> None:
        shown = ", ".join(declarations[:5])
        super().__init__(f"Forbidden background declarations: {shown}")
        self.declarations = list(declarations)


class ColorPolicyViolation(RetryableDesignError):
    """The design used colors outside the allow-list."""

    def __init__(self, colors: List[str]) -> None:
        shown = ", ".join(colors[:10])
        super().__init__(f"Unauthorized colors: {shown}")
        self.colors = list(colors)


class AttemptsExhausted(DesignPipelineError):
    """Every attempt for one candidate was rejected."""

    def __init__(self, template_name: str, attempts: int, last_error: Optional[RetryableDesignError] = None):
        reason = last_error.reason if last_error else "unknown"
        super().__init__(f"{template_name}: rejected after {attempts} attempt(s) ({reason})")
        self.template_name = template_name
        self.attempts = attempts
        self.last_error = last_error


class AllCandidatesFailed(DesignPipelineError):
    """No candidate in a batch reached the accepted state."""

    def __init__(self, rejections: Dict[str, str]) -> None:
        super().__init__(
            f"All {len(rejections)} design candidate(s) were rejected; please try again"
        )
        self.rejections = dict(rejections)
