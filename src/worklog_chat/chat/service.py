"""Chat use case: check the index, select context, answer."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from worklog_chat.exceptions import EmptyIndexError, IndexUnavailable
from worklog_chat.generation.answer_generator import AnswerGenerator
from worklog_chat.generation.prompt_templates import NO_DATA_ANSWER
from worklog_chat.models.schemas import ChatRequest, ChatResponse
from worklog_chat.observability.logger import get_logger
from worklog_chat.protocols.similarity_index import SimilarityIndex
from worklog_chat.retrieval.selector import RetrievalSelector

logger = get_logger("chat_service")


class ChatService:
    def __init__(
        self,
        index: SimilarityIndex,
        selector: RetrievalSelector,
        generator: AnswerGenerator,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._index = index
        self._selector = selector
        self._generator = generator
        self._clock = clock

    async def process_query(self, request: ChatRequest) -> ChatResponse:
        if not await self._index.is_available():
            raise IndexUnavailable("Similarity index is not available")
        if not await self._index.exists():
            raise EmptyIndexError("No embeddings found. Run the embedding process first.")

        now = self._clock()
        query = request.query.strip()
        retrieval = await self._selector.select(query, now, request.max_results)

        if retrieval.is_empty:
            logger.info("chat_no_context", is_temporal=retrieval.is_temporal)
            return ChatResponse(
                answer=NO_DATA_ANSWER,
                sources=[],
                is_temporal_query=retrieval.is_temporal,
                documents_found=0,
            )

        answer = await self._generator.generate(query, retrieval, now)
        return ChatResponse(
            answer=answer,
            sources=sorted(retrieval.source_ids),
            is_temporal_query=retrieval.is_temporal,
            documents_found=retrieval.document_count,
        )
