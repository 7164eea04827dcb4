"""Gemini generation client."""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from google import genai
from google.genai import types

from ..errors import TransportError
from .types import GenerationConfig


class GeminiClient:
    """Google Gemini client using the google-genai SDK."""

    def __init__(
        self,
        api_key: str,
        model: str,
        config: Optional[GenerationConfig] = None,
        client: Optional[Any] = None,
    ) -> None:
        self.model = model
        self.config = config or GenerationConfig()
        self.client = client or genai.Client(api_key=api_key)

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        try:
            # The SDK call is synchronous; keep the event loop free
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=self.model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt or None,
                    max_output_tokens=self.config.max_tokens,
                    temperature=self.config.temperature,
                    response_mime_type="application/json" if self.config.json_mode else None,
                ),
            )
        except Exception as error:
            raise TransportError(f"{type(error).__name__}: {error}") from error

        text = response.text if response is not None else None
        if not text:
            raise TransportError("Empty response: no candidates")
        return text
