"""Recursive character splitter tuned for Markdown work logs.

Tries the coarsest separator first (level-2 headings), falls back to finer
ones for pieces that are still too long, and finally cuts by characters.
Adjacent pieces are merged back up to ``chunk_size`` with ``chunk_overlap``
characters carried over between consecutive chunks.
"""

from __future__ import annotations

from worklog_chat.exceptions import ConfigurationError
from worklog_chat.models.domain import RetrievalDocument

DEFAULT_SEPARATORS: tuple[str, ...] = ("\n## ", "\n### ", "\n\n", "\n", " ")


class RecursiveTextSplitter:
    def __init__(
        self,
        chunk_size: int = 800,
        chunk_overlap: int = 100,
        separators: tuple[str, ...] = DEFAULT_SEPARATORS,
    ) -> None:
        if chunk_size <= 0:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be in [0, chunk_size={chunk_size})"
            )
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._separators = separators

    def split(
        self, text: str, source_id: str, metadata: dict | None = None
    ) -> list[RetrievalDocument]:
        metadata = metadata or {}
        pieces = self.split_text(text)
        return [
            RetrievalDocument(text=piece, source_id=source_id, chunk_index=i, metadata=dict(metadata))
            for i, piece in enumerate(pieces)
        ]

    def split_text(self, text: str) -> list[str]:
        if not text.strip():
            return []
        return self._split(text, list(self._separators))

    def _split(self, text: str, separators: list[str]) -> list[str]:
        separator: str | None = None
        finer: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate in text:
                separator = candidate
                finer = separators[i + 1 :]
                break

        if separator is None:
            return self._hard_cut(text)

        chunks: list[str] = []
        pending: list[str] = []
        for piece in self._split_keeping_separator(text, separator):
            if len(piece) <= self._chunk_size:
                pending.append(piece)
                continue
            if pending:
                chunks.extend(self._merge(pending))
                pending = []
            chunks.extend(self._split(piece, finer) if finer else self._hard_cut(piece))
        if pending:
            chunks.extend(self._merge(pending))
        return chunks

    @staticmethod
    def _split_keeping_separator(text: str, separator: str) -> list[str]:
        parts = text.split(separator)
        pieces = [parts[0]] + [separator + p for p in parts[1:]]
        return [p for p in pieces if p]

    def _merge(self, pieces: list[str]) -> list[str]:
        chunks: list[str] = []
        window: list[str] = []
        total = 0
        for piece in pieces:
            length = len(piece)
            if window and total + length > self._chunk_size:
                self._emit(window, chunks)
                # Drop from the front until only the overlap (and room for piece) remains
                while window and (
                    total > self._chunk_overlap or total + length > self._chunk_size
                ):
                    total -= len(window.pop(0))
            window.append(piece)
            total += length
        self._emit(window, chunks)
        return chunks

    @staticmethod
    def _emit(window: list[str], chunks: list[str]) -> None:
        chunk = "".join(window).strip()
        if chunk:
            chunks.append(chunk)

    def _hard_cut(self, text: str) -> list[str]:
        step = self._chunk_size - self._chunk_overlap
        chunks = []
        for start in range(0, len(text), step):
            chunk = text[start : start + self._chunk_size].strip()
            if chunk:
                chunks.append(chunk)
            if start + self._chunk_size >= len(text):
                break
        return chunks
