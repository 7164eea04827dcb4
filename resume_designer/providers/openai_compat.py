"""OpenAI-compatible generation client."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from ..errors import TransportError
from .types import GenerationConfig

logger = logging.getLogger(__name__)


class OpenAICompatibleClient:
    """Client for OpenAI-compatible chat completion APIs."""

    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str = "",
        config: Optional[GenerationConfig] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self.api_base = api_base or ""
        self.config = config or GenerationConfig()
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=api_base or None)
        self._forced_temperature: Optional[float] = None

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        kwargs = self._build_chat_kwargs(system_prompt, user_prompt)
        try:
            completion = await self._create_with_temperature_retry(kwargs)
        except Exception as error:
            raise TransportError(f"{type(error).__name__}: {error}") from error

        if not completion.choices:
            raise TransportError("Empty response: no choices")
        content = completion.choices[0].message.content
        if not content:
            raise TransportError("Empty response: no content")
        return content

    def _build_chat_kwargs(self, system_prompt: str, user_prompt: str) -> Dict[str, Any]:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})

        kwargs: Dict[str, Any] = {"model": self.model, "messages": messages}
        if self.config.max_tokens and self.config.max_tokens > 0:
            kwargs["max_tokens"] = self.config.max_tokens
        temperature = self._normalize_temperature(self.config.temperature)
        if temperature is not None:
            kwargs["temperature"] = temperature
        if self.config.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    def _normalize_temperature(self, temperature: Optional[float]) -> Optional[float]:
        if self._forced_temperature is not None:
            return self._forced_temperature
        return temperature

    async def _create_with_temperature_retry(self, kwargs: Dict[str, Any]):
        try:
            return await self.client.chat.completions.create(**kwargs)
        except Exception as error:
            allowed = self._extract_allowed_temperature(error)
            current = kwargs.get("temperature")
            if allowed is None or current == allowed:
                raise

            logger.info(f"Model {self.model} only accepts temperature {allowed}; retrying")
            retry_kwargs = dict(kwargs)
            retry_kwargs["temperature"] = allowed
            self._forced_temperature = allowed
            return await self.client.chat.completions.create(**retry_kwargs)

    def _extract_allowed_temperature(self, error: Exception) -> Optional[float]:
        message = str(error).lower()
        if "invalid temperature" not in message:
            return None

        # Example: "invalid temperature: only 1 is allowed for this model"
        match = re.search(r"only\s+([0-9]+(?:\.[0-9]+)?)\s+is allowed", message)
        if not match:
            return None
        return float(match.group(1))
