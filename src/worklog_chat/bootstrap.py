"""Component wiring shared by the API server and the CLI scripts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worklog_chat.chat.service import ChatService
from worklog_chat.chunking.recursive_splitter import RecursiveTextSplitter
from worklog_chat.config.settings import Settings
from worklog_chat.embeddings.openai_embedder import OpenAIEmbedder
from worklog_chat.exceptions import ConfigurationError
from worklog_chat.generation.answer_generator import AnswerGenerator
from worklog_chat.generation.gemini_provider import GeminiProvider
from worklog_chat.ingestion.pipeline import EmbeddingPipeline
from worklog_chat.ingestion.worklog_repository import WorklogRepository
from worklog_chat.retrieval.selector import RetrievalConfig, RetrievalSelector
from worklog_chat.retrieval.vector_index import VectorSimilarityIndex
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore


@dataclass
class Components:
    settings: Settings
    chunk_store: SQLiteChunkStore
    vector_store: FAISSVectorStore
    index: VectorSimilarityIndex
    chat_service: ChatService
    embedding_pipeline: EmbeddingPipeline
    repository: WorklogRepository


def validate_settings(settings: Settings) -> None:
    if not settings.openai_api_key:
        raise ConfigurationError("WORKLOG_OPENAI_API_KEY environment variable is required")
    if not settings.google_api_key:
        raise ConfigurationError("WORKLOG_GOOGLE_API_KEY environment variable is required")


async def build_components(settings: Settings) -> Components:
    validate_settings(settings)
    Path(settings.chunk_db_path).parent.mkdir(parents=True, exist_ok=True)

    # Storage
    chunk_store = SQLiteChunkStore(settings.chunk_db_path)
    await chunk_store.initialize()
    vector_store = FAISSVectorStore(
        dimensions=settings.embedding_dimensions,
        index_path=settings.faiss_index_path,
    )

    # Embedding + index
    embedder = OpenAIEmbedder(
        api_key=settings.openai_api_key,
        model=settings.embedding_model,
        batch_size=settings.embedding_batch_size,
        dimensions=settings.embedding_dimensions,
    )
    index = VectorSimilarityIndex(
        vector_store=vector_store,
        chunk_store=chunk_store,
        embedder=embedder,
    )

    # Chat
    selector = RetrievalSelector(index, config=RetrievalConfig.from_settings(settings))
    generator = AnswerGenerator(
        llm=GeminiProvider(api_key=settings.google_api_key, model=settings.gemini_model),
        temperature=settings.gemini_temperature,
        max_tokens=settings.gemini_max_tokens,
    )
    chat_service = ChatService(index=index, selector=selector, generator=generator)

    # Ingestion
    repository = WorklogRepository(settings.data_dir)
    embedding_pipeline = EmbeddingPipeline(
        repository=repository,
        chunker=RecursiveTextSplitter(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
        ),
        embedder=embedder,
        vector_store=vector_store,
        chunk_store=chunk_store,
        index=index,
        batch_size=settings.ingest_batch_size,
        rebuild_threshold=settings.update_rebuild_threshold,
    )

    return Components(
        settings=settings,
        chunk_store=chunk_store,
        vector_store=vector_store,
        index=index,
        chat_service=chat_service,
        embedding_pipeline=embedding_pipeline,
        repository=repository,
    )
