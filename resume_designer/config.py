"""Configuration loading and validation.

Settings come from ``config/config.yaml`` (committed defaults) overlaid with
``config/config.local.yaml`` (local secrets), then a few environment
variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

ENV_OVERRIDES = {
    "RESUME_DESIGNER_PROVIDER": ("generation", "provider"),
    "RESUME_DESIGNER_MODEL": ("generation", "model"),
    "RESUME_DESIGNER_TEMPLATES_URL": ("templates", "remote_url"),
}


@dataclass
class GenerationSettings:
    """Settings for the external text-generation service."""

    provider: str = "openai"
    model: str = "gpt-4o"
    api_key: str = ""
    api_base: str = ""
    max_tokens: int = 8000
    temperature: Optional[float] = 0.7


@dataclass
class PipelineSettings:
    """Candidate batch and retry settings."""

    max_attempts: int = 3
    retry_delay_seconds: float = 2.0
    candidate_count: int = 3
    deadline_seconds: Optional[float] = None


@dataclass
class TemplateSettings:
    """Remote template source settings."""

    remote_url: Optional[str] = None
    cache_ttl_seconds: float = 300
    request_timeout_seconds: float = 10.0


@dataclass
class DesignerConfig:
    generation: GenerationSettings = field(default_factory=GenerationSettings)
    pipeline: PipelineSettings = field(default_factory=PipelineSettings)
    templates: TemplateSettings = field(default_factory=TemplateSettings)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DesignerConfig":
        return cls(
            generation=_build(GenerationSettings, raw.get("generation")),
            pipeline=_build(PipelineSettings, raw.get("pipeline")),
            templates=_build(TemplateSettings, raw.get("templates")),
        )


def _build(settings_cls, section: Any):
    if not section:
        return settings_cls()
    if not isinstance(section, dict):
        raise ValueError(f"Config section for {settings_cls.__name__} must be a mapping")
    known = settings_cls.__dataclass_fields__.keys()
    return settings_cls(**{k: v for k, v in section.items() if k in known})


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return data


def load_raw_config(config_path: str = "config/config.local.yaml") -> dict:
    """Load the raw configuration dictionary.

    Priority order:
    1. config.local.yaml (user's local config with secrets)
    2. config.yaml (defaults)

    An explicit non-local path is loaded as-is. Missing files yield an empty
    mapping so the dataclass defaults apply.
    """
    target = Path(config_path)
    if target.name == "config.local.yaml":
        base = _load_yaml(target.with_name("config.yaml"))
        data = _deep_merge(base, _load_yaml(target))
    else:
        data = _load_yaml(target)

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            data.setdefault(section, {})
            data[section][key] = value
    return data


def load_config(config_path: str = "config/config.local.yaml") -> DesignerConfig:
    """Load and build the typed configuration."""
    return DesignerConfig.from_dict(load_raw_config(config_path))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigIssue:
    """A single configuration issue."""

    field: str
    message: str
    severity: Severity


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigIssue]:
    """Validate raw configuration and return a list of issues (empty = valid)."""
    # Imported here to avoid a cycle: providers import the settings dataclasses.
    from .providers import PROVIDER_DEFAULTS, resolve_api_key

    issues: List[ConfigIssue] = []
    generation = raw_config.get("generation") or {}
    pipeline = raw_config.get("pipeline") or {}
    templates = raw_config.get("templates") or {}

    provider = str(generation.get("provider", "openai") or "").lower()
    if not provider:
        issues.append(ConfigIssue("generation.provider", "provider must be a non-empty string", Severity.ERROR))
    elif provider not in PROVIDER_DEFAULTS:
        issues.append(
            ConfigIssue(
                "generation.provider",
                f"Unknown provider '{provider}'. Expected one of: {', '.join(PROVIDER_DEFAULTS)}",
                Severity.WARNING,
            )
        )

    if provider and not resolve_api_key(provider, str(generation.get("api_key", "") or "")):
        env_key = PROVIDER_DEFAULTS.get(provider, {}).get("env_key", "")
        hint = f"{env_key} not set. " if env_key else ""
        issues.append(
            ConfigIssue(
                "generation.api_key",
                f"{hint}Set the env var or add generation.api_key to config/config.local.yaml",
                Severity.ERROR,
            )
        )

    for key in ("max_attempts", "candidate_count"):
        value = pipeline.get(key)
        if value is not None and (not isinstance(value, int) or value < 1):
            issues.append(ConfigIssue(f"pipeline.{key}", f"{key} must be a positive integer", Severity.ERROR))

    delay = pipeline.get("retry_delay_seconds")
    if delay is not None and (not isinstance(delay, (int, float)) or delay < 0):
        issues.append(
            ConfigIssue("pipeline.retry_delay_seconds", "retry_delay_seconds must be >= 0", Severity.ERROR)
        )

    deadline = pipeline.get("deadline_seconds")
    if deadline is not None and (not isinstance(deadline, (int, float)) or deadline <= 0):
        issues.append(
            ConfigIssue("pipeline.deadline_seconds", "deadline_seconds must be positive or null", Severity.ERROR)
        )

    ttl = templates.get("cache_ttl_seconds")
    if ttl is not None and (not isinstance(ttl, (int, float)) or ttl < 0):
        issues.append(
            ConfigIssue("templates.cache_ttl_seconds", "cache_ttl_seconds must be >= 0", Severity.WARNING)
        )

    return issues
