"""API tests against real stores with fake model providers."""

import asyncio
import os
from pathlib import Path

import pytest
from conftest import NOW, FakeIndex
from fastapi.testclient import TestClient

from worklog_chat.api.app import create_app
from worklog_chat.bootstrap import Components
from worklog_chat.chat.service import ChatService
from worklog_chat.chunking.recursive_splitter import RecursiveTextSplitter
from worklog_chat.generation.answer_generator import AnswerGenerator
from worklog_chat.generation.prompt_templates import NO_DATA_ANSWER
from worklog_chat.ingestion.pipeline import EmbeddingPipeline
from worklog_chat.ingestion.worklog_repository import WorklogRepository
from worklog_chat.retrieval.selector import RetrievalSelector
from worklog_chat.retrieval.vector_index import VectorSimilarityIndex
from worklog_chat.storage.sqlite_chunk_store import SQLiteChunkStore
from worklog_chat.vectorstore.faiss_store import FAISSVectorStore


def build_components(settings, embedder, llm, index=None) -> Components:
    chunk_store = SQLiteChunkStore(settings.chunk_db_path)
    vector_store = FAISSVectorStore(dimensions=embedder.dimensions, index_path=settings.faiss_index_path)
    vector_index = VectorSimilarityIndex(vector_store, chunk_store, embedder)
    index = index or vector_index
    chat_service = ChatService(
        index=index,
        selector=RetrievalSelector(index),
        generator=AnswerGenerator(llm=llm),
        clock=lambda: NOW,
    )
    repository = WorklogRepository(settings.data_dir)
    pipeline = EmbeddingPipeline(
        repository=repository,
        chunker=RecursiveTextSplitter(),
        embedder=embedder,
        vector_store=vector_store,
        chunk_store=chunk_store,
        index=vector_index,
    )
    return Components(
        settings=settings,
        chunk_store=chunk_store,
        vector_store=vector_store,
        index=index,
        chat_service=chat_service,
        embedding_pipeline=pipeline,
        repository=repository,
    )


@pytest.fixture
def components(settings, embedder, llm):
    data_dir = Path(settings.data_dir)
    data_dir.mkdir(parents=True)
    (data_dir / "2024-09-16.md").write_text("# Monday\n\nConfigured Amazon Connect.")
    (data_dir / "2024-09-02.md").write_text("# Labour Day\n\nBudget review.")
    os.utime(data_dir / "2024-09-02.md", (1_600_000_000, 1_600_000_000))
    return build_components(settings, embedder, llm)


@pytest.fixture
def client(components):
    asyncio.run(components.chunk_store.initialize())
    with TestClient(create_app(components=components)) as test_client:
        yield test_client


def test_health_before_embedding(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["index_exists"] is False
    assert body["chunk_count"] == 0
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert float(response.headers["X-Duration-MS"]) >= 0


def test_chat_on_empty_index_conflicts(client):
    response = client.post("/chat", json={"query": "what did I do last week"})
    assert response.status_code == 409


def test_blank_query_rejected(client):
    assert client.post("/chat", json={"query": "   "}).status_code == 422
    assert client.post("/chat", json={}).status_code == 422


def test_rebuild_then_chat(client, llm):
    rebuild = client.post("/embeddings/rebuild", json={"force_rebuild": True})
    assert rebuild.status_code == 200
    assert rebuild.json()["success"] is True
    assert rebuild.json()["files_processed"] == 2

    status = client.get("/embeddings/status").json()
    assert status["collection_exists"] is True
    assert status["document_count"] == 2

    response = client.post("/chat", json={"query": "what did I do this week"})
    assert response.status_code == 200
    body = response.json()
    assert body["is_temporal_query"] is True
    assert body["sources"] == ["2024-09-16.md"]
    assert body["documents_found"] == 1
    assert body["answer"] == llm.answer
    assert "[2024-09-16] # Monday" in llm.prompts[0]


def test_chat_without_relevant_context(client, llm):
    client.post("/embeddings/rebuild", json={"force_rebuild": True})

    body = client.post("/chat", json={"query": "early March"}).json()

    assert body["answer"] == NO_DATA_ANSWER
    assert body["sources"] == []
    assert llm.prompts == []


def test_update_endpoint(client):
    client.post("/embeddings/rebuild", json={"force_rebuild": True})

    report = client.post("/embeddings/update", json={"since": "2021-01-01T00:00:00"}).json()

    assert report["success"] is True
    assert report["files_processed"] == 1


def test_unavailable_index_is_503(settings, embedder, llm):
    components = build_components(settings, embedder, llm, index=FakeIndex(available=False))
    asyncio.run(components.chunk_store.initialize())
    with TestClient(create_app(components=components)) as test_client:
        response = test_client.post("/chat", json={"query": "budget"})
    assert response.status_code == 503
