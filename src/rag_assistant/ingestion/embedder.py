"""Embedding gateway — text in, fixed-length vector out."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rag_assistant.config import Settings, settings
from rag_assistant.errors import ServiceError, Stage, service_stage

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


class EmbeddingGateway(ABC):
    """Turns text into an embedding vector.

    The same gateway (and therefore the same model) must be used to
    populate an index and to query it.
    """

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding of *text*; raise ``ServiceError`` on failure."""
        ...


class LangChainEmbeddingGateway(EmbeddingGateway):
    """Adapter over any LangChain :class:`~langchain_core.embeddings.Embeddings`.

    Parameters
    ----------
    embeddings:
        The LangChain embedding model.
    dimension:
        Expected vector length. When set, vectors of any other length are
        rejected instead of being written to (or queried against) an index
        built with a different model.
    """

    def __init__(self, embeddings: Embeddings, *, dimension: int | None = None) -> None:
        self._embeddings = embeddings
        self.dimension = dimension

    def embed(self, text: str) -> list[float]:
        with service_stage(Stage.EMBEDDING):
            vector = self._embeddings.embed_query(text)

        if self.dimension is not None and len(vector) != self.dimension:
            raise ServiceError(
                Stage.EMBEDDING,
                f"expected a {self.dimension}-dimensional vector, got {len(vector)}",
            )
        return [float(v) for v in vector]


def get_embedding_function(config: Settings = settings) -> Embeddings:
    """Return the configured LangChain embedding model.

    ``embedding_provider="openai"`` uses the OpenAI embeddings endpoint;
    ``"huggingface"`` runs a sentence-transformer locally.
    """
    provider = config.embedding_provider.lower()
    if provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(
            model=config.embedding_model,
            api_key=config.openai_api_key or None,
            timeout=config.request_timeout,
            max_retries=0,
        )
    if provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=config.embedding_model)
    raise ValueError(f"Unsupported embedding_provider: {config.embedding_provider!r}")


def build_embedding_gateway(config: Settings = settings) -> LangChainEmbeddingGateway:
    """Create the gateway described by *config*."""
    logger.info(
        "Using %s embeddings: %s", config.embedding_provider, config.embedding_model
    )
    return LangChainEmbeddingGateway(
        get_embedding_function(config),
        dimension=config.embedding_dimension,
    )
