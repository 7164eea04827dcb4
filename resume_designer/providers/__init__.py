"""Generation client factory and defaults."""

from __future__ import annotations

import os
from typing import Dict

from ..config import GenerationSettings
from ..errors import ConfigurationError
from .base import GenerationClient
from .gemini import GeminiClient
from .openai_compat import OpenAICompatibleClient
from .types import GenerationConfig

PROVIDER_DEFAULTS: Dict[str, Dict[str, str]] = {
    "openai": {"api_base": "", "env_key": "OPENAI_API_KEY"},
    "gemini": {"api_base": "", "env_key": "GEMINI_API_KEY"},
    "glm": {"api_base": "https://open.bigmodel.cn/api/paas/v4", "env_key": "GLM_API_KEY"},
    "kimi": {"api_base": "https://api.moonshot.cn/v1", "env_key": "KIMI_API_KEY"},
    "deepseek": {"api_base": "https://api.deepseek.com", "env_key": "DEEPSEEK_API_KEY"},
}


def create_client(settings: GenerationSettings) -> GenerationClient:
    """Build the generation client described by ``settings``.

    Raises:
        ConfigurationError: no API key could be resolved.
    """
    provider_name = (settings.provider or "openai").lower()
    api_key = resolve_api_key(provider_name, settings.api_key)
    if not api_key:
        env_key = PROVIDER_DEFAULTS.get(provider_name, {}).get("env_key", "")
        hint = f"{env_key} not set. " if env_key else "API key not set. "
        raise ConfigurationError(f"{hint}Please set the env var or add api_key to config/config.local.yaml")

    config = GenerationConfig(max_tokens=settings.max_tokens, temperature=settings.temperature)

    if provider_name == "gemini":
        return GeminiClient(api_key=api_key, model=settings.model, config=config)

    defaults = PROVIDER_DEFAULTS.get(provider_name, {})
    base = settings.api_base or defaults.get("api_base", "")
    return OpenAICompatibleClient(api_key=api_key, model=settings.model, api_base=base, config=config)


def resolve_api_key(provider: str, api_key: str) -> str:
    """Resolve an API key from the provider env var, a literal, or a ``${VAR}`` placeholder.

    Returns an empty string when nothing resolves.
    """
    defaults = PROVIDER_DEFAULTS.get(provider, {})
    env_key = defaults.get("env_key", "")
    api_key = api_key or ""

    if env_key:
        env_value = os.environ.get(env_key, "")
        if env_value:
            return env_value

    if api_key and not api_key.startswith("${"):
        return api_key

    if api_key.startswith("${") and api_key.endswith("}"):
        return os.environ.get(api_key[2:-1], "")

    return ""


__all__ = [
    "GenerationClient",
    "GenerationConfig",
    "GeminiClient",
    "OpenAICompatibleClient",
    "PROVIDER_DEFAULTS",
    "create_client",
    "resolve_api_key",
]
