"""Protocol for LLM providers."""

from __future__ import annotations

from typing import Protocol


class LLMProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str: ...
