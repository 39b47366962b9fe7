"""Protocol for the similarity index consumed by retrieval selection."""

from __future__ import annotations

from typing import Protocol

from worklog_chat.models.domain import ScoredCandidate


class SimilarityIndex(Protocol):
    async def search(self, query_text: str, limit: int) -> list[ScoredCandidate]:
        """Return up to ``limit`` candidates ranked by ascending distance."""
        ...

    async def is_available(self) -> bool: ...

    async def exists(self) -> bool: ...
