"""Protocol for text chunking."""

from __future__ import annotations

from typing import Protocol

from worklog_chat.models.domain import RetrievalDocument


class Chunker(Protocol):
    def split(
        self, text: str, source_id: str, metadata: dict | None = None
    ) -> list[RetrievalDocument]: ...
