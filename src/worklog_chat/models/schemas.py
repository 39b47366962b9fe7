"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    query: str = Field(min_length=1, pattern=r"\S")
    max_results: int | None = Field(default=None, ge=1)


class ChatResponse(BaseModel):
    answer: str
    sources: list[str]
    is_temporal_query: bool
    documents_found: int


class RebuildRequest(BaseModel):
    force_rebuild: bool = False
    batch_size: int | None = Field(default=None, ge=1)


class UpdateRequest(BaseModel):
    since: datetime | None = None


class EmbeddingReport(BaseModel):
    success: bool
    documents_processed: int
    files_processed: int
    message: str
    errors: list[str] = Field(default_factory=list)


class EmbeddingStatus(BaseModel):
    is_available: bool
    collection_exists: bool
    document_count: int | None = None
    source_count: int | None = None
    last_update: datetime | None = None


class HealthResponse(BaseModel):
    status: str
    index_available: bool
    index_exists: bool
    chunk_count: int
    source_count: int
    index_size: int
