"""SQLite-backed store for embedded work-log chunks."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import aiosqlite

from worklog_chat.models.domain import RetrievalDocument
from worklog_chat.storage.migrations import initialize_chunk_db


def chunk_id_for(document: RetrievalDocument) -> str:
    source_id, chunk_index = document.key
    return f"{source_id}#{chunk_index}"


CHUNK_INSERT = (
    "INSERT OR REPLACE INTO chunks "
    "(chunk_id, source_id, chunk_index, text, metadata, indexed_at) "
    "VALUES (?, ?, ?, ?, ?, ?)"
)


def _chunk_rows(documents: list[RetrievalDocument]) -> list[tuple]:
    indexed_at = datetime.now(timezone.utc).isoformat()
    return [
        (
            chunk_id_for(d),
            d.source_id,
            d.chunk_index,
            d.text,
            json.dumps(d.metadata, default=str),
            indexed_at,
        )
        for d in documents
    ]


class SQLiteChunkStore:
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        await initialize_chunk_db(self._db_path)

    async def replace_all(self, documents: list[RetrievalDocument]) -> list[str]:
        """Swap the whole table for ``documents`` in one transaction."""
        rows = _chunk_rows(documents)
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute("DELETE FROM chunks")
            await db.executemany(CHUNK_INSERT, rows)
            await db.commit()
        return [row[0] for row in rows]

    async def replace_sources(
        self, source_ids: list[str], documents: list[RetrievalDocument]
    ) -> list[str]:
        """Drop every chunk of ``source_ids`` and insert ``documents``, atomically."""
        rows = _chunk_rows(documents)
        async with aiosqlite.connect(self._db_path) as db:
            if source_ids:
                placeholders = ",".join("?" for _ in source_ids)
                await db.execute(
                    f"DELETE FROM chunks WHERE source_id IN ({placeholders})",
                    source_ids,
                )
            await db.executemany(CHUNK_INSERT, rows)
            await db.commit()
        return [row[0] for row in rows]

    async def get_chunks_by_ids(self, chunk_ids: list[str]) -> dict[str, RetrievalDocument]:
        if not chunk_ids:
            return {}
        placeholders = ",".join("?" for _ in chunk_ids)
        async with aiosqlite.connect(self._db_path) as db:
            db.row_factory = aiosqlite.Row
            async with db.execute(
                f"SELECT * FROM chunks WHERE chunk_id IN ({placeholders})",
                chunk_ids,
            ) as cursor:
                rows = await cursor.fetchall()
                return {row["chunk_id"]: self._row_to_document(row) for row in rows}

    async def get_chunk_ids_by_sources(self, source_ids: list[str]) -> list[str]:
        if not source_ids:
            return []
        placeholders = ",".join("?" for _ in source_ids)
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                f"SELECT chunk_id FROM chunks WHERE source_id IN ({placeholders})",
                source_ids,
            ) as cursor:
                rows = await cursor.fetchall()
                return [row[0] for row in rows]

    async def count_chunks(self) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT COUNT(*) FROM chunks") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def count_sources(self) -> int:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT COUNT(DISTINCT source_id) FROM chunks") as cursor:
                row = await cursor.fetchone()
                return row[0] if row else 0

    async def last_indexed_at(self) -> datetime | None:
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute("SELECT MAX(indexed_at) FROM chunks") as cursor:
                row = await cursor.fetchone()
                if row is None or row[0] is None:
                    return None
                return datetime.fromisoformat(row[0])

    @staticmethod
    def _row_to_document(row: aiosqlite.Row) -> RetrievalDocument:
        return RetrievalDocument(
            text=row["text"],
            source_id=row["source_id"],
            chunk_index=row["chunk_index"],
            metadata=json.loads(row["metadata"]),
        )
