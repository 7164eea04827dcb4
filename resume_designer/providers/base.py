"""Generation client protocol definition."""

from __future__ import annotations

from typing import Protocol


class GenerationClient(Protocol):
    """Protocol for text-generation clients.

    ``generate`` returns the raw response text, which is expected (but not
    trusted) to contain a JSON object with an ``html`` field. Transport and
    API failures are raised as :class:`~resume_designer.errors.TransportError`.
    """

    async def generate(self, system_prompt: str, user_prompt: str) -> str: ...
