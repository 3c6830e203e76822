"""Semantic retriever — question in, ranked context with sources out.

Usage::

    from rag_assistant.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(embedder, store, default_k=3)
    result    = retriever.retrieve("What does the contract say about renewal?")
    print(result.sources, result.context[:80])
"""

from __future__ import annotations

import logging

from rag_assistant.errors import Stage, service_stage
from rag_assistant.ingestion.embedder import EmbeddingGateway
from rag_assistant.retrieval.assembler import assemble
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.models import RetrievalResult

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """Embeds a question, queries the store and assembles the context.

    Parameters
    ----------
    embedder:
        Gateway used for the query embedding; must match the one that
        populated *store*.
    store:
        A concrete vector-store backend.
    default_k:
        Number of matches requested when :meth:`retrieve` gets no *k*.
    """

    def __init__(
        self,
        embedder: EmbeddingGateway,
        store: VectorStoreBase,
        *,
        default_k: int = 3,
    ) -> None:
        if default_k <= 0:
            raise ValueError(f"default_k must be positive, got {default_k}")
        self._embedder = embedder
        self._store = store
        self.default_k = default_k

    def retrieve(self, question: str, *, k: int | None = None) -> RetrievalResult:
        """Return the assembled context for *question*.

        Raises ``ServiceError`` labelled ``embedding`` or ``retrieval``.
        """
        k = self.default_k if k is None else k
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")

        with service_stage(Stage.EMBEDDING):
            query_vector = self._embedder.embed(question)

        with service_stage(Stage.RETRIEVAL):
            matches = self._store.query(query_vector, top_k=k, include_metadata=True)

        logger.debug("Retrieved %d relevant chunks", len(matches))
        return assemble(matches)
