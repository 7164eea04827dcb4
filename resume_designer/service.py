"""Caller-facing facade over the orchestrator."""

from __future__ import annotations

import logging
from typing import Optional

from .cache import TTLCache
from .config import DesignerConfig
from .contracts import ATSIssueModel, DesignPreviewModel, DesignPreviewsResponse, DesignRequest, DesignResponse
from .observability import DesignObserver
from .pipeline import DesignOrchestrator, DesignPreview
from .providers import GenerationClient, create_client
from .retry import RetryPolicy
from .templates import HttpTemplateSource, TemplateCatalog

logger = logging.getLogger(__name__)


def build_orchestrator(
    config: DesignerConfig,
    client: Optional[GenerationClient] = None,
    observer: Optional[DesignObserver] = None,
) -> DesignOrchestrator:
    """Wire an orchestrator from configuration.

    ``client`` overrides the configured generation service.
    """
    remote_source = None
    if config.templates.remote_url:
        remote_source = HttpTemplateSource(
            config.templates.remote_url,
            timeout=config.templates.request_timeout_seconds,
        )
    catalog = TemplateCatalog(
        remote_source=remote_source,
        cache=TTLCache(ttl_seconds=config.templates.cache_ttl_seconds),
    )
    return DesignOrchestrator(
        client=client or create_client(config.generation),
        catalog=catalog,
        retry_policy=RetryPolicy.from_settings(config.pipeline),
        observer=observer,
        deadline_seconds=config.pipeline.deadline_seconds,
        candidate_count=config.pipeline.candidate_count,
    )


def to_model(preview: DesignPreview) -> DesignPreviewModel:
    return DesignPreviewModel(
        template_name=preview.template_name,
        template_style=preview.template_style,
        layout=preview.layout,
        accent_color=preview.accent_color,
        html=preview.html,
        contrast_passed=preview.contrast_passed,
        contrast_summary=dict(preview.contrast_summary),
        ats_score=preview.ats_score,
        ats_warnings=list(preview.ats_warnings),
        ats_issues=[
            ATSIssueModel(type=issue.type, message=issue.message, severity=issue.severity)
            for issue in preview.ats_issues
        ],
    )


class DesignService:
    """Validated requests in, normalized designs out.

    Every design returned here went through the orchestrator, so its HTML has
    already been normalized.
    """

    def __init__(self, orchestrator: DesignOrchestrator):
        self.orchestrator = orchestrator

    async def preview(self, request: DesignRequest) -> DesignPreviewsResponse:
        if request.mode == "questionnaire":
            previews = await self.orchestrator.questionnaire_designs(
                request.resume_text, request.questionnaire.to_answers(), count=request.count
            )
        else:
            previews = await self.orchestrator.preview_designs(request.resume_text, count=request.count)
        logger.info(f"Returning {len(previews)}/{request.count} design preview(s)")
        return DesignPreviewsResponse(designs=[to_model(p) for p in previews], requested=request.count)

    async def generate(self, request: DesignRequest) -> DesignResponse:
        if request.mode == "questionnaire":
            previews = await self.orchestrator.questionnaire_designs(
                request.resume_text, request.questionnaire.to_answers(), count=1
            )
            preview = previews[0]
        else:
            preview = await self.orchestrator.generate_design(request.resume_text, request.template_name)
        return DesignResponse(design=to_model(preview))
