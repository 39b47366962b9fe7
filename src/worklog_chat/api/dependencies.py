"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from worklog_chat.chat.service import ChatService
from worklog_chat.ingestion.pipeline import EmbeddingPipeline
from worklog_chat.retrieval.vector_index import VectorSimilarityIndex
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_embedding_pipeline(request: Request) -> EmbeddingPipeline:
    return request.app.state.embedding_pipeline


def get_index(request: Request) -> VectorSimilarityIndex:
    return request.app.state.index


def get_chunk_store(request: Request) -> SQLiteChunkStore:
    return request.app.state.chunk_store


def get_vector_store(request: Request) -> FAISSVectorStore:
    return request.app.state.vector_store
