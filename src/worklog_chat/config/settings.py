"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    openai_api_key: str = ""
    google_api_key: str = ""

    # Embedding
    embedding_model: str = "text-embedding-3-small"
    embedding_dimensions: int = 1536
    embedding_batch_size: int = 100

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.3
    gemini_max_tokens: int = 1000

    # Retrieval selection
    temporal_probe_text: str = "work tasks projects"
    temporal_probe_limit: int = 100
    temporal_max_results: int = 20
    content_search_limit: int = 20
    content_max_results: int = 10
    relevance_threshold: float = 0.5

    # Chunking
    chunk_size: int = 800
    chunk_overlap: int = 100

    # Ingestion
    data_dir: str = "data/worklogs"
    ingest_batch_size: int = 20
    update_rebuild_threshold: int = 10
    last_update_file: str = "data/.last_embedding_update"

    # Storage paths
    chunk_db_path: str = "data/chunks.db"
    faiss_index_path: str = "data/faiss_index"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    model_config = {"env_file": ".env", "env_prefix": "WORKLOG_"}
