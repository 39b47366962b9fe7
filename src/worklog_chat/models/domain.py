"""Core domain objects used throughout the system."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Any

from worklog_chat.exceptions import InvalidDocumentError
from worklog_chat.query.date_range import DateRange

ISO_DATE_PATTERN = re.compile(r"(\d{4}-\d{2}-\d{2})")
UNKNOWN_DATE_LABEL = "Unknown date"


def extract_iso_date(text: str) -> datetime | None:
    """Midnight of the first YYYY-MM-DD in ``text``; None if absent or not a real date."""
    match = ISO_DATE_PATTERN.search(text)
    if match is None:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d")
    except ValueError:
        return None


@dataclass(frozen=True)
class RetrievalDocument:
    text: str
    source_id: str
    chunk_index: int = 0
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise InvalidDocumentError("Document text cannot be empty")
        if not self.source_id or not self.source_id.strip():
            raise InvalidDocumentError("Document must have a valid source")
        if self.chunk_index < 0:
            raise InvalidDocumentError(f"Chunk index must be >= 0, got {self.chunk_index}")

    @property
    def key(self) -> tuple[str, int]:
        return (self.source_id, self.chunk_index)

    @cached_property
    def embedded_date(self) -> datetime | None:
        return extract_iso_date(self.source_id)

    def is_within_range(self, date_range: DateRange) -> bool:
        # Undated documents never take part in date-windowed retrieval
        if self.embedded_date is None:
            return False
        return date_range.contains(self.embedded_date)

    def display_string(self) -> str:
        label = (
            self.embedded_date.strftime("%Y-%m-%d")
            if self.embedded_date is not None
            else UNKNOWN_DATE_LABEL
        )
        return f"[{label}] {self.text}"

    def to_metadata(self) -> dict[str, Any]:
        return {**self.metadata, "source": self.source_id, "chunk": self.chunk_index}

    @classmethod
    def from_metadata(cls, text: str, metadata: dict[str, Any]) -> RetrievalDocument:
        extra = {k: v for k, v in metadata.items() if k not in ("source", "chunk")}
        return cls(
            text=text,
            source_id=metadata["source"],
            chunk_index=int(metadata.get("chunk") or 0),
            metadata=extra,
        )


@dataclass(frozen=True)
class ScoredCandidate:
    document: RetrievalDocument
    score: float  # distance: lower is more relevant


@dataclass(frozen=True)
class RetrievalResult:
    context_text: str
    source_ids: frozenset[str]
    is_temporal: bool
    document_count: int
    documents: tuple[RetrievalDocument, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.document_count == 0

    @classmethod
    def empty(cls, is_temporal: bool) -> RetrievalResult:
        return cls(context_text="", source_ids=frozenset(), is_temporal=is_temporal, document_count=0)


@dataclass
class WorkLog:
    log_id: str
    date: datetime
    content: str
    file_path: str  # relative to the data directory
    metadata: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.content or not self.content.strip():
            raise InvalidDocumentError(f"Work log {self.file_path} has no content")

    @property
    def formatted_date(self) -> str:
        return self.date.strftime("%Y-%m-%d")

    def is_within_range(self, date_range: DateRange) -> bool:
        return date_range.contains(self.date)
