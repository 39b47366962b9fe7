"""Embedding pipeline: load work logs -> split -> embed, then commit to both stores.

Nothing in the chunk table or the FAISS index changes until every new vector
exists, so a failed run leaves the previous index intact.
"""

from __future__ import annotations

import asyncio
from datetime import datetime

import numpy as np

from worklog_chat.exceptions import EmbeddingError, WorklogChatError
from worklog_chat.ingestion.worklog_repository import WorklogRepository
from worklog_chat.models.domain import RetrievalDocument, WorkLog
from worklog_chat.models.schemas import EmbeddingReport, EmbeddingStatus
from worklog_chat.observability.logger import get_logger
from worklog_chat.protocols.chunker import Chunker
from worklog_chat.protocols.embedder import Embedder
from worklog_chat.protocols.similarity_index import SimilarityIndex
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore, chunk_id_for
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore

logger = get_logger("embedding_pipeline")


class EmbeddingPipeline:
    def __init__(
        self,
        repository: WorklogRepository,
        chunker: Chunker,
        embedder: Embedder,
        vector_store: FAISSVectorStore,
        chunk_store: SQLiteChunkStore,
        index: SimilarityIndex,
        batch_size: int = 20,
        rebuild_threshold: int = 10,
    ) -> None:
        self._repository = repository
        self._chunker = chunker
        self._embedder = embedder
        self._vector_store = vector_store
        self._chunk_store = chunk_store
        self._index = index
        self._batch_size = batch_size
        self._rebuild_threshold = rebuild_threshold

    async def create_embeddings(
        self, force_rebuild: bool = False, batch_size: int | None = None
    ) -> EmbeddingReport:
        """Embed every work log, replacing whatever the index held before."""
        batch_size = batch_size or self._batch_size
        try:
            if not await self._index.is_available():
                return self._failure("Failed to create embeddings", "Similarity index is not available")

            work_logs = await asyncio.to_thread(self._repository.get_all)
            if not work_logs:
                return EmbeddingReport(
                    success=False,
                    documents_processed=0,
                    files_processed=0,
                    message="No work logs found to process",
                )

            if not force_rebuild and await self._index.exists():
                return self._failure(
                    "Embeddings already exist",
                    "Use force_rebuild to recreate them, or update_embeddings for changed files",
                )

            # Embed everything before the live stores are touched
            documents: list[RetrievalDocument] = []
            vectors: list[np.ndarray] = []
            for start in range(0, len(work_logs), batch_size):
                batch = work_logs[start : start + batch_size]
                batch_documents = await self._split(batch)
                vectors.append(await self._embed(batch_documents))
                documents.extend(batch_documents)
                logger.info(
                    "batch_embedded",
                    files=len(batch),
                    chunks=len(batch_documents),
                    progress=f"{start + len(batch)}/{len(work_logs)}",
                )

            staged = await asyncio.to_thread(
                FAISSVectorStore.build,
                self._vector_store.dimensions,
                [chunk_id_for(d) for d in documents],
                np.vstack(vectors),
            )
            await self._chunk_store.replace_all(documents)
            await self._vector_store.swap_safe(staged)
            await self._vector_store.save_safe()
        except WorklogChatError as e:
            logger.error("create_embeddings_failed", error=str(e))
            return self._failure("Failed to create embeddings", str(e))

        files_processed = len(work_logs)
        documents_processed = len(documents)
        return EmbeddingReport(
            success=True,
            documents_processed=documents_processed,
            files_processed=files_processed,
            message=(
                f"Successfully processed {files_processed} files and created "
                f"{documents_processed} document chunks"
            ),
        )

    async def update_embeddings(self, since: datetime | None) -> EmbeddingReport:
        """Re-embed work logs modified after ``since`` (all files when None)."""
        since = since or datetime.fromtimestamp(0)
        try:
            modified = await asyncio.to_thread(self._repository.get_modified_after, since)
            if not modified:
                return EmbeddingReport(
                    success=True,
                    documents_processed=0,
                    files_processed=0,
                    message="No new or modified files found. Embeddings are up to date.",
                )

            if len(modified) > self._rebuild_threshold:
                return self._failure(
                    "Many files modified. Recommend full rebuild for better reliability.",
                    "Use force_rebuild for a complete rebuild",
                )

            documents = await self._split(modified)
            embeddings = await self._embed(documents)

            sources = [log.file_path for log in modified]
            stale_ids = await self._chunk_store.get_chunk_ids_by_sources(sources)
            await self._chunk_store.replace_sources(sources, documents)
            await self._vector_store.replace_safe(
                stale_ids, [chunk_id_for(d) for d in documents], embeddings
            )
            await self._vector_store.save_safe()
        except WorklogChatError as e:
            logger.error("update_embeddings_failed", error=str(e))
            return self._failure("Failed to update embeddings", str(e))

        logger.info("embeddings_updated", files=len(modified), chunks=len(documents))
        return EmbeddingReport(
            success=True,
            documents_processed=len(documents),
            files_processed=len(modified),
            message=f"Successfully updated embeddings for {len(modified)} modified files",
        )

    async def status(self) -> EmbeddingStatus:
        available = await self._index.is_available()
        if not available:
            return EmbeddingStatus(is_available=False, collection_exists=False)
        return EmbeddingStatus(
            is_available=True,
            collection_exists=await self._index.exists(),
            document_count=await self._chunk_store.count_chunks(),
            source_count=await self._chunk_store.count_sources(),
            last_update=await self._chunk_store.last_indexed_at(),
        )

    async def _split(self, work_logs: list[WorkLog]) -> list[RetrievalDocument]:
        documents: list[RetrievalDocument] = []
        for log in work_logs:
            chunks = await asyncio.to_thread(
                self._chunker.split, log.content, log.file_path, dict(log.metadata)
            )
            documents.extend(chunks)
        return documents

    async def _embed(self, documents: list[RetrievalDocument]) -> np.ndarray:
        dimensions = self._vector_store.dimensions
        if not documents:
            return np.empty((0, dimensions), dtype=np.float32)
        embeddings = np.array(
            await self._embedder.embed_texts([d.text for d in documents]), dtype=np.float32
        )
        if embeddings.shape != (len(documents), dimensions):
            raise EmbeddingError(
                f"Expected {len(documents)} vectors of {dimensions} dimensions, "
                f"got shape {embeddings.shape}"
            )
        return embeddings

    @staticmethod
    def _failure(message: str, error: str) -> EmbeddingReport:
        return EmbeddingReport(
            success=False,
            documents_processed=0,
            files_processed=0,
            message=message,
            errors=[error],
        )
