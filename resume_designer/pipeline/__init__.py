"""Validation chain and orchestration of design candidates."""

from .chain import (
    CandidateState,
    GenerationCandidate,
    ValidationChain,
    ValidationProfile,
    questionnaire_profile,
    template_profile,
)
from .orchestrator import DesignOrchestrator, DesignPreview, build_preview
from .policy import find_forbidden_backgrounds, find_unauthorized_colors, parse_design_response

__all__ = [
    # Validation chain
    "CandidateState",
    "GenerationCandidate",
    "ValidationChain",
    "ValidationProfile",
    "questionnaire_profile",
    "template_profile",
    # Policy checks
    "find_forbidden_backgrounds",
    "find_unauthorized_colors",
    "parse_design_response",
    # Orchestration
    "DesignOrchestrator",
    "DesignPreview",
    "build_preview",
]
