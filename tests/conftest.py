"""Shared test fixtures."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from worklog_chat.config.settings import Settings
from worklog_chat.models.domain import RetrievalDocument, ScoredCandidate

# Wednesday; the most recent Sunday is 2024-09-15
NOW = datetime(2024, 9, 18, 14, 30)

KEYWORDS = ("connect", "budget", "travel", "deploy")


def make_doc(source_id: str, text: str = "Worked on tasks", chunk_index: int = 0) -> RetrievalDocument:
    return RetrievalDocument(text=text, source_id=source_id, chunk_index=chunk_index)


def scored(doc: RetrievalDocument, score: float = 0.1) -> ScoredCandidate:
    return ScoredCandidate(document=doc, score=score)


class FakeIndex:
    """In-memory similarity index that replays canned candidates."""

    def __init__(
        self,
        candidates: list[ScoredCandidate] | None = None,
        available: bool = True,
        has_data: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.candidates = candidates or []
        self.available = available
        self.has_data = has_data
        self.error = error
        self.calls: list[tuple[str, int]] = []

    async def search(self, query_text: str, limit: int) -> list[ScoredCandidate]:
        self.calls.append((query_text, limit))
        if self.error is not None:
            raise self.error
        return list(self.candidates[:limit])

    async def is_available(self) -> bool:
        return self.available

    async def exists(self) -> bool:
        return self.has_data


class KeywordEmbedder:
    """Deterministic embedder: one dimension per keyword plus a bias term."""

    def __init__(self) -> None:
        self.embed_texts_calls = 0
        self.embed_query_calls = 0
        self.error: Exception | None = None

    @property
    def dimensions(self) -> int:
        return len(KEYWORDS) + 1

    def _vector(self, text: str) -> list[float]:
        lowered = text.lower()
        return [float(lowered.count(k)) for k in KEYWORDS] + [0.05]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.embed_texts_calls += 1
        if self.error is not None:
            raise self.error
        return [self._vector(t) for t in texts]

    async def embed_query(self, query: str) -> list[float]:
        self.embed_query_calls += 1
        if self.error is not None:
            raise self.error
        return self._vector(query)


class FakeLLM:
    def __init__(self, answer: str = "You worked on the Connect rollout.") -> None:
        self.answer = answer
        self.prompts: list[str] = []
        self.systems: list[str | None] = []

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 1000,
    ) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        return self.answer


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def settings(tmp_dir):
    """Test settings with temp paths."""
    return Settings(
        openai_api_key="test-key",
        google_api_key="test-key",
        data_dir=str(Path(tmp_dir) / "worklogs"),
        chunk_db_path=str(Path(tmp_dir) / "chunks.db"),
        faiss_index_path=str(Path(tmp_dir) / "faiss_index"),
        last_update_file=str(Path(tmp_dir) / ".last_update"),
    )


@pytest.fixture
def embedder():
    return KeywordEmbedder()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def tmp_dir():
    """Create a temporary directory."""
    return tempfile.mkdtemp()
