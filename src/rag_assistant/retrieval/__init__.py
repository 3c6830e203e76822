"""
Retrieval — vector search, ranking, and context assembly.

This module wraps the vector store behind a clean interface so that
the answering layer never needs to know which DB is backing retrieval.

Public surface
--------------
- :class:`SemanticRetriever` — question in, :class:`RetrievalResult` out.
- :func:`assemble` — rank matches and build context plus source list.
- :class:`VectorStoreBase` — abstract backend (subclass for Pinecone, etc.).
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`IndexedVector`, :class:`ScoredMatch`, :class:`RetrievalResult` — data models.
"""

from rag_assistant.retrieval.assembler import assemble
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.models import IndexedVector, RetrievalResult, ScoredMatch
from rag_assistant.retrieval.retriever import SemanticRetriever

__all__ = [
    "ChromaVectorStore",
    "IndexedVector",
    "RetrievalResult",
    "ScoredMatch",
    "SemanticRetriever",
    "VectorStoreBase",
    "assemble",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from rag_assistant.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
