"""Resume Designer - validated, print-ready resume designs from an untrusted generator."""

from .errors import AllCandidatesFailed, DesignPipelineError
from .pipeline import DesignOrchestrator, DesignPreview
from .prompts import QuestionnaireAnswers
from .templates import DESIGN_TEMPLATES, DesignTemplate, TemplateCatalog

__version__ = "0.1.0"

__all__ = [
    "AllCandidatesFailed",
    "DesignPipelineError",
    "DesignOrchestrator",
    "DesignPreview",
    "QuestionnaireAnswers",
    "DESIGN_TEMPLATES",
    "DesignTemplate",
    "TemplateCatalog",
]
