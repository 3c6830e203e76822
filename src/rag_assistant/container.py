"""Dependency injection for the ingestion and answering services.

A :class:`ServiceContainer` is built once at process start (by the HTTP
app's lifespan or the KServe model's ``load``) and closed at shutdown.
Nothing in the package holds a module-level client.
"""

from __future__ import annotations

import logging

from rag_assistant.config import Settings, settings
from rag_assistant.generation.llm import GenerationService
from rag_assistant.generation.orchestrator import AnswerOrchestrator
from rag_assistant.ingestion.embedder import EmbeddingGateway
from rag_assistant.ingestion.pipeline import DocumentIngestor
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.retriever import SemanticRetriever

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Wires collaborators into the ingestor and the orchestrator.

    Parameters
    ----------
    embedder:
        Shared by the write and query paths so both use the same model.
    store:
        Vector store backend.
    generator:
        Chat-completion backend.
    config:
        Chunking, batching and retrieval parameters.
    """

    def __init__(
        self,
        *,
        embedder: EmbeddingGateway,
        store: VectorStoreBase,
        generator: GenerationService,
        config: Settings = settings,
    ) -> None:
        self.embedder = embedder
        self.store = store
        self.generator = generator
        self.ingestor = DocumentIngestor(
            embedder,
            store,
            chunk_size=config.chunk_size,
            overlap_size=config.overlap_size,
            min_chunk_size=config.min_chunk_size,
            batch_size=config.batch_size,
            upload_dir=config.upload_dir,
        )
        self.retriever = SemanticRetriever(embedder, store, default_k=config.top_k)
        self.orchestrator = AnswerOrchestrator(
            self.retriever,
            generator,
            top_k=config.top_k,
            max_tokens=config.max_tokens,
        )

    @classmethod
    def from_settings(cls, config: Settings = settings) -> ServiceContainer:
        """Connect to the configured embedding model, Chroma and chat model."""
        from rag_assistant.generation.llm import ChatModelGenerator, get_llm
        from rag_assistant.ingestion.embedder import build_embedding_gateway
        from rag_assistant.retrieval.chroma_store import ChromaVectorStore

        store = ChromaVectorStore(
            config.chroma_collection,
            host=config.chroma_host,
            port=config.chroma_port,
            distance=config.chroma_distance,
        )
        return cls(
            embedder=build_embedding_gateway(config),
            store=store,
            generator=ChatModelGenerator(get_llm(config)),
            config=config,
        )

    def close(self) -> None:
        """Release collaborator resources."""
        self.store.close()
        logger.info("Service container closed")
