"""Embedding management endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from worklog_chat.api.dependencies import get_embedding_pipeline
from worklog_chat.ingestion.pipeline import EmbeddingPipeline
from worklog_chat.models.schemas import (
    EmbeddingReport,
    EmbeddingStatus,
    RebuildRequest,
    UpdateRequest,
)

router = APIRouter(prefix="/embeddings")


@router.post("/rebuild", response_model=EmbeddingReport)
async def rebuild(
    request: RebuildRequest,
    pipeline: EmbeddingPipeline = Depends(get_embedding_pipeline),
) -> EmbeddingReport:
    return await pipeline.create_embeddings(
        force_rebuild=request.force_rebuild, batch_size=request.batch_size
    )


@router.post("/update", response_model=EmbeddingReport)
async def update(
    request: UpdateRequest,
    pipeline: EmbeddingPipeline = Depends(get_embedding_pipeline),
) -> EmbeddingReport:
    return await pipeline.update_embeddings(request.since)


@router.get("/status", response_model=EmbeddingStatus)
async def embedding_status(
    pipeline: EmbeddingPipeline = Depends(get_embedding_pipeline),
) -> EmbeddingStatus:
    return await pipeline.status()
