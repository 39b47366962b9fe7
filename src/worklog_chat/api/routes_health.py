"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from worklog_chat.api.dependencies import get_chunk_store, get_index, get_vector_store
from worklog_chat.models.schemas import HealthResponse
from worklog_chat.retrieval.vector_index import VectorSimilarityIndex
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(
    index: VectorSimilarityIndex = Depends(get_index),
    chunk_store: SQLiteChunkStore = Depends(get_chunk_store),
    vector_store: FAISSVectorStore = Depends(get_vector_store),
) -> HealthResponse:
    available = await index.is_available()
    return HealthResponse(
        status="ok" if available else "degraded",
        index_available=available,
        index_exists=await index.exists(),
        chunk_count=await chunk_store.count_chunks() if available else 0,
        source_count=await chunk_store.count_sources() if available else 0,
        index_size=vector_store.size,
    )
