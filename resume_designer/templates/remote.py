"""HTTP source for community templates."""

from __future__ import annotations

import logging
from typing import Any, List

import httpx

from .catalog import DesignTemplate

logger = logging.getLogger(__name__)


class HttpTemplateSource:
    """Fetch templates from a JSON endpoint.

    The endpoint returns either a list of template objects or
    ``{"templates": [...]}``. Rows that fail validation are skipped.
    Transport errors propagate; the catalog cache turns them into "no remote
    templates this cycle".
    """

    def __init__(self, url: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self.url = url
        self.timeout = timeout
        self._client = client

    async def fetch_templates(self) -> List[DesignTemplate]:
        if self._client is not None:
            response = await self._client.get(self.url, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)
        response.raise_for_status()
        templates = parse_template_rows(response.json())
        logger.info(f"Fetched {len(templates)} templates from {self.url}")
        return templates


def parse_template_rows(payload: Any) -> List[DesignTemplate]:
    if isinstance(payload, dict):
        payload = payload.get("templates", [])
    if not isinstance(payload, list):
        raise ValueError("Template payload must be a list or an object with a 'templates' list")

    templates: List[DesignTemplate] = []
    for row in payload:
        if not isinstance(row, dict):
            logger.warning(f"Skipping non-object template row: {row!r}")
            continue
        try:
            templates.append(DesignTemplate.from_dict(row))
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping invalid template {row.get('name', '?')!r}: {e}")
    return templates
