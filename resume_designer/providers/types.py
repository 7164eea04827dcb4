"""Provider-agnostic generation types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class GenerationConfig:
    """Per-request generation settings."""

    max_tokens: int = 8000
    temperature: Optional[float] = 0.7
    json_mode: bool = True
