"""Idempotent database schema creation."""

from __future__ import annotations

import aiosqlite

CHUNKS_TABLE = """
CREATE TABLE IF NOT EXISTS chunks (
    chunk_id TEXT PRIMARY KEY,
    source_id TEXT NOT NULL,
    chunk_index INTEGER NOT NULL,
    text TEXT NOT NULL,
    metadata TEXT NOT NULL DEFAULT '{}',
    indexed_at TEXT NOT NULL
)
"""

CHUNKS_SOURCE_INDEX = """
CREATE INDEX IF NOT EXISTS idx_chunks_source_id ON chunks(source_id)
"""


async def initialize_chunk_db(db_path: str) -> None:
    async with aiosqlite.connect(db_path) as db:
        await db.execute(CHUNKS_TABLE)
        await db.execute(CHUNKS_SOURCE_INDEX)
        await db.commit()
