"""Retrieval selection: pick the chunks a question is answered from, and their order.

Temporal questions ("what did I do last week") probe the index with a broad,
topic-agnostic string and then narrow by the date embedded in each source.
Everything else is a plain similarity search cut off at a distance threshold.
The strategy is chosen once per query and never falls back to the other one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from worklog_chat.config.settings import Settings
from worklog_chat.models.domain import RetrievalDocument, RetrievalResult
from worklog_chat.observability.logger import get_logger
from worklog_chat.protocols.similarity_index import SimilarityIndex
from worklog_chat.query.date_range import DateRange
from worklog_chat.query.temporal_parser import TemporalQueryParser

logger = get_logger("retrieval_selector")

CONTEXT_SEPARATOR = "\n\n---\n\n"


@dataclass(frozen=True)
class RetrievalConfig:
    probe_text: str = "work tasks projects"
    probe_limit: int = 100
    temporal_max_results: int = 20
    content_search_limit: int = 20
    content_max_results: int = 10
    relevance_threshold: float = 0.5
    separator: str = CONTEXT_SEPARATOR

    @classmethod
    def from_settings(cls, settings: Settings) -> RetrievalConfig:
        return cls(
            probe_text=settings.temporal_probe_text,
            probe_limit=settings.temporal_probe_limit,
            temporal_max_results=settings.temporal_max_results,
            content_search_limit=settings.content_search_limit,
            content_max_results=settings.content_max_results,
            relevance_threshold=settings.relevance_threshold,
        )


class RetrievalSelector:
    def __init__(
        self,
        index: SimilarityIndex,
        config: RetrievalConfig | None = None,
        parser: TemporalQueryParser | None = None,
    ) -> None:
        self._index = index
        self._config = config or RetrievalConfig()
        self._parser = parser or TemporalQueryParser()

    @property
    def config(self) -> RetrievalConfig:
        return self._config

    async def select(
        self,
        query: str,
        now: datetime,
        max_results: int | None = None,
    ) -> RetrievalResult:
        """Select and render the context for ``query``.

        Args:
            query: The user's question.
            now: Reference instant for relative phrases such as "last week".
            max_results: Budget for content queries; temporal queries always
                use ``config.temporal_max_results``.

        Errors raised by the index propagate unchanged.
        """
        date_range = self._parser.parse(query, now)
        is_temporal = date_range is not None

        if date_range is not None:
            strategy = "date_window"
            candidates, documents = await self._select_by_date(date_range)
            budget = self._config.temporal_max_results
        else:
            strategy = "score_window"
            candidates, documents = await self._select_by_score(query)
            budget = max_results if max_results is not None else self._config.content_max_results

        documents = documents[:budget]

        logger.info(
            "retrieval_selected",
            strategy=strategy,
            rule=self._parser.match_rule(query),
            candidates=candidates,
            selected=len(documents),
            sources=len({d.source_id for d in documents}),
            budget=budget,
        )

        if not documents:
            return RetrievalResult.empty(is_temporal)
        return self._render(documents, is_temporal)

    async def _select_by_date(self, date_range: DateRange) -> tuple[int, list[RetrievalDocument]]:
        results = await self._index.search(self._config.probe_text, self._config.probe_limit)
        in_range = [r.document for r in results if r.document.is_within_range(date_range)]
        # Stable: same-day chunks keep the index's relative order
        in_range.sort(key=lambda d: d.embedded_date, reverse=True)
        return len(results), in_range

    async def _select_by_score(self, query: str) -> tuple[int, list[RetrievalDocument]]:
        results = await self._index.search(query, self._config.content_search_limit)
        relevant = [r.document for r in results if r.score < self._config.relevance_threshold]
        return len(results), relevant

    def _render(self, documents: list[RetrievalDocument], is_temporal: bool) -> RetrievalResult:
        return RetrievalResult(
            context_text=self._config.separator.join(d.display_string() for d in documents),
            source_ids=frozenset(d.source_id for d in documents),
            is_temporal=is_temporal,
            document_count=len(documents),
            documents=tuple(documents),
        )
