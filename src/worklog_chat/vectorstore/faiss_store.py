"""FAISS L2 vector store with chunk-id mapping and persistence.

Vectors are L2-normalised before indexing, so search scores are squared
Euclidean distances in [0, 4]: lower means closer.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path

import faiss
import numpy as np

from worklog_chat.observability.logger import get_logger

logger = get_logger("faiss_store")


class FAISSVectorStore:
    def __init__(self, dimensions: int, index_path: str | None = None) -> None:
        self._dimensions = dimensions
        self._index_path = index_path
        self._index = self._new_index()
        self._id_to_chunk_id: dict[int, str] = {}
        self._chunk_id_to_int: dict[str, int] = {}
        self._next_id: int = 0
        # Held for reads too: remove_ids must not run during a search
        self._lock = asyncio.Lock()

        if index_path:
            self._try_load(index_path)

    def _new_index(self) -> faiss.IndexIDMap:
        return faiss.IndexIDMap(faiss.IndexFlatL2(self._dimensions))

    def _try_load(self, path: str) -> None:
        index_file = os.path.join(path, "index.faiss")
        mapping_file = os.path.join(path, "id_mapping.json")
        if os.path.exists(index_file) and os.path.exists(mapping_file):
            self._index = faiss.read_index(index_file)
            with open(mapping_file) as f:
                data = json.load(f)
            self._id_to_chunk_id = {int(k): v for k, v in data["id_to_chunk_id"].items()}
            self._chunk_id_to_int = data["chunk_id_to_int"]
            self._next_id = data["next_id"]
            logger.info("faiss_loaded", size=self._index.ntotal, path=path)

    def add(self, chunk_ids: list[str], embeddings: np.ndarray) -> None:
        if len(chunk_ids) == 0:
            return
        embeddings = np.ascontiguousarray(embeddings, dtype=np.float32)
        faiss.normalize_L2(embeddings)
        # Re-adding a chunk replaces its previous vector
        self.remove([cid for cid in chunk_ids if cid in self._chunk_id_to_int])
        int_ids = self._assign_int_ids(chunk_ids)
        self._index.add_with_ids(embeddings, np.array(int_ids, dtype=np.int64))
        logger.info("faiss_added", count=len(chunk_ids), total=self._index.ntotal)

    def remove(self, chunk_ids: list[str]) -> int:
        int_ids = [self._chunk_id_to_int.pop(cid) for cid in chunk_ids if cid in self._chunk_id_to_int]
        if not int_ids:
            return 0
        for int_id in int_ids:
            self._id_to_chunk_id.pop(int_id, None)
        removed = self._index.remove_ids(np.array(int_ids, dtype=np.int64))
        logger.info("faiss_removed", count=int(removed), total=self._index.ntotal)
        return int(removed)

    def replace(self, stale_ids: list[str], chunk_ids: list[str], embeddings: np.ndarray) -> None:
        self.remove(stale_ids)
        self.add(chunk_ids, embeddings)

    @classmethod
    def build(cls, dimensions: int, chunk_ids: list[str], embeddings: np.ndarray) -> FAISSVectorStore:
        """A detached store holding exactly ``chunk_ids``; see ``swap_safe``."""
        store = cls(dimensions)
        store.add(chunk_ids, embeddings)
        return store

    async def swap_safe(self, staged: FAISSVectorStore) -> None:
        if staged.dimensions != self._dimensions:
            raise ValueError(
                f"Cannot swap in a {staged.dimensions}-d index over a {self._dimensions}-d one"
            )
        async with self._lock:
            self._index = staged._index
            self._id_to_chunk_id = staged._id_to_chunk_id
            self._chunk_id_to_int = staged._chunk_id_to_int
            self._next_id = staged._next_id
        logger.info("faiss_swapped", size=self._index.ntotal)

    async def replace_safe(
        self, stale_ids: list[str], chunk_ids: list[str], embeddings: np.ndarray
    ) -> None:
        async with self._lock:
            await asyncio.to_thread(self.replace, stale_ids, chunk_ids, embeddings)

    async def search_safe(self, query_embedding: np.ndarray, top_k: int) -> list[tuple[str, float]]:
        async with self._lock:
            return await asyncio.to_thread(self.search, query_embedding, top_k)

    async def save_safe(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self.save)

    def search(self, query_embedding: np.ndarray, top_k: int) -> list[tuple[str, float]]:
        """Return (chunk_id, distance) pairs, closest first."""
        if self._index.ntotal == 0 or top_k <= 0:
            return []
        query_embedding = np.ascontiguousarray(query_embedding, dtype=np.float32).reshape(1, -1)
        faiss.normalize_L2(query_embedding)
        distances, indices = self._index.search(query_embedding, min(top_k, self._index.ntotal))
        results = []
        for idx, distance in zip(indices[0], distances[0]):
            idx = int(idx)
            if idx == -1:
                continue
            chunk_id = self._id_to_chunk_id.get(idx)
            if chunk_id:
                results.append((chunk_id, float(distance)))
        return results

    def save(self, path: str | None = None) -> None:
        path = path or self._index_path
        if not path:
            return
        Path(path).mkdir(parents=True, exist_ok=True)
        faiss.write_index(self._index, os.path.join(path, "index.faiss"))
        with open(os.path.join(path, "id_mapping.json"), "w") as f:
            json.dump(
                {
                    "id_to_chunk_id": self._id_to_chunk_id,
                    "chunk_id_to_int": self._chunk_id_to_int,
                    "next_id": self._next_id,
                },
                f,
            )
        logger.info("faiss_saved", path=path, size=self._index.ntotal)

    @property
    def size(self) -> int:
        return self._index.ntotal

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _assign_int_ids(self, chunk_ids: list[str]) -> list[int]:
        int_ids = []
        for cid in chunk_ids:
            self._id_to_chunk_id[self._next_id] = cid
            self._chunk_id_to_int[cid] = self._next_id
            int_ids.append(self._next_id)
            self._next_id += 1
        return int_ids
