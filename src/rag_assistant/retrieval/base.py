"""Abstract base class for vector-store backends.

Adding a new backend (Pinecone, Weaviate, Qdrant …) only requires
subclassing :class:`VectorStoreBase` and implementing the three abstract
methods.  The rest of the retrieval stack is backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rag_assistant.retrieval.models import IndexedVector, ScoredMatch


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Implementations must be safe to share between concurrent requests.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, vectors: list[IndexedVector]) -> int:
        """Persist *vectors* and return how many were written.

        Raises ``ServiceError`` (stage ``indexing``) on failure.
        """
        ...

    @abstractmethod
    def query(
        self,
        vector: list[float],
        *,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[ScoredMatch]:
        """Return up to *top_k* nearest neighbours of *vector*.

        Results may come back in any order; callers rank them.  Raises
        ``ServiceError`` (stage ``retrieval``) on failure.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def close(self) -> None:
        """Release client resources at process shutdown.  No-op by default."""
