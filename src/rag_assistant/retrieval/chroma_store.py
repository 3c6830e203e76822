"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from rag_assistant.config import settings
from rag_assistant.errors import Stage, service_stage
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.models import TEXT, IndexedVector, ScoredMatch

logger = logging.getLogger(__name__)


def _distance_to_score(distance: float, space: str) -> float:
    """Convert a Chroma distance into a similarity score (higher = closer)."""
    if space in ("cosine", "ip"):
        # Chroma reports 1 - similarity for both spaces.
        return 1.0 - distance
    return 1.0 / (1.0 + distance)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance:
        HNSW distance function used when the collection is created.
    client:
        Pre-built Chroma client; when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance: str = settings.chroma_distance,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name)
        self.distance = distance
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": distance},
        )
        logger.info("Connected to Chroma collection: %s", collection_name)

    # -- VectorStoreBase overrides --------------------------------------------

    def upsert(self, vectors: list[IndexedVector]) -> int:
        if not vectors:
            return 0
        with service_stage(Stage.INDEXING):
            self._collection.upsert(
                ids=[v.id for v in vectors],
                embeddings=[v.values for v in vectors],
                documents=[v.metadata.get(TEXT, "") for v in vectors],
                metadatas=[dict(v.metadata) for v in vectors],
            )
        logger.debug("Stored %d embeddings in %s", len(vectors), self.collection_name)
        return len(vectors)

    def query(
        self,
        vector: list[float],
        *,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[ScoredMatch]:
        include = ["metadatas", "distances"] if include_metadata else ["distances"]
        with service_stage(Stage.RETRIEVAL):
            results = self._collection.query(
                query_embeddings=[vector],
                n_results=top_k,
                include=include,
            )

        distances = (results.get("distances") or [[]])[0]
        metadatas = (results.get("metadatas") or [[]])[0] if include_metadata else []
        matches: list[ScoredMatch] = []
        for i, dist in enumerate(distances):
            meta = metadatas[i] if i < len(metadatas) and metadatas[i] else {}
            matches.append(
                ScoredMatch(
                    score=_distance_to_score(dist, self.distance),
                    metadata={k: str(v) for k, v in meta.items()},
                )
            )
        logger.debug("Retrieved %d matches from %s", len(matches), self.collection_name)
        return matches

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
