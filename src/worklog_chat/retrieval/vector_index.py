"""Similarity index over FAISS vectors and SQLite-stored chunk text."""

from __future__ import annotations

import aiosqlite
import numpy as np

from worklog_chat.exceptions import EmbeddingError, IndexUnavailable
from worklog_chat.models.domain import ScoredCandidate
from worklog_chat.observability.logger import get_logger
from worklog_chat.protocols.embedder import Embedder
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore

logger = get_logger("vector_index")


class VectorSimilarityIndex:
    def __init__(
        self,
        vector_store: FAISSVectorStore,
        chunk_store: SQLiteChunkStore,
        embedder: Embedder,
    ) -> None:
        self._vector_store = vector_store
        self._chunk_store = chunk_store
        self._embedder = embedder

    async def search(self, query_text: str, limit: int) -> list[ScoredCandidate]:
        try:
            query_embedding = await self._embedder.embed_query(query_text)
            hits = await self._vector_store.search_safe(
                np.array(query_embedding, dtype=np.float32), limit
            )
            documents = await self._chunk_store.get_chunks_by_ids([cid for cid, _ in hits])
        except (EmbeddingError, aiosqlite.Error) as e:
            raise IndexUnavailable(f"Similarity search failed: {e}") from e

        # Keep the FAISS ranking; vectors whose chunk row is gone are skipped
        candidates = [
            ScoredCandidate(document=documents[cid], score=distance)
            for cid, distance in hits
            if cid in documents
        ]
        logger.info("similarity_search", limit=limit, hits=len(hits), candidates=len(candidates))
        return candidates

    async def is_available(self) -> bool:
        try:
            await self._chunk_store.count_chunks()
        except aiosqlite.Error as e:
            logger.warning("index_unavailable", error=str(e))
            return False
        return True

    async def exists(self) -> bool:
        return self._vector_store.size > 0
