"""Shared pytest configuration and fixtures.

The fakes below stand in for the embedding model, the vector store and the
chat model so the whole pipeline runs in-process.
"""

from __future__ import annotations

import pytest

from rag_assistant.errors import ServiceError, Stage
from rag_assistant.generation.llm import GenerationService
from rag_assistant.ingestion.embedder import EmbeddingGateway
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.models import IndexedVector, ScoredMatch


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class FakeEmbedder(EmbeddingGateway):
    """Deterministic 3-d embeddings; optionally fails on the n-th call (0-based)."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.calls: list[str] = []
        self.fail_on_call = fail_on_call

    def embed(self, text: str) -> list[float]:
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            self.calls.append(text)
            raise ServiceError(Stage.EMBEDDING, "model unavailable")
        self.calls.append(text)
        return [float(len(text)), 1.0, 0.0]


class FakeVectorStore(VectorStoreBase):
    """In-memory store that records upserts and returns canned matches."""

    def __init__(
        self,
        matches: list[ScoredMatch] | None = None,
        fail_on_upsert: int | None = None,
    ) -> None:
        super().__init__("test-collection")
        self.healthy = True
        self.matches: list[ScoredMatch] = matches or []
        self.fail_on_upsert = fail_on_upsert
        self.batches: list[list[IndexedVector]] = []
        self.upsert_calls = 0
        self.queries: list[tuple[list[float], int, bool]] = []
        self.closed = False

    @property
    def vectors(self) -> list[IndexedVector]:
        return [v for batch in self.batches for v in batch]

    def upsert(self, vectors: list[IndexedVector]) -> int:
        call = self.upsert_calls
        self.upsert_calls += 1
        if self.fail_on_upsert is not None and call == self.fail_on_upsert:
            raise ConnectionError("index unreachable")
        self.batches.append(list(vectors))
        return len(vectors)

    def query(
        self,
        vector: list[float],
        *,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[ScoredMatch]:
        self.queries.append((vector, top_k, include_metadata))
        return self.matches[:top_k]

    def health_check(self) -> bool:
        return self.healthy

    def close(self) -> None:
        self.closed = True


class FakeGenerator(GenerationService):
    """Records prompts and returns a fixed answer (or raises *error*)."""

    def __init__(self, answer: str = "Forty-two.", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, str, int]] = []

    def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        self.calls.append((system_prompt, user_prompt, max_tokens))
        if self.error is not None:
            raise self.error
        return self.answer


def make_match(score: float, text: str, document_name: str = "doc.txt", chunk_index: int = 0) -> ScoredMatch:
    return ScoredMatch(
        score=score,
        metadata={
            "document_id": f"id-{document_name}",
            "document_name": document_name,
            "chunk_index": str(chunk_index),
            "text": text,
        },
    )


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def fake_generator() -> FakeGenerator:
    return FakeGenerator()
