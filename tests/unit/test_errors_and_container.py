"""Unit tests for error kinds and the service container."""

from __future__ import annotations

import pytest
from conftest import FakeEmbedder, FakeGenerator, FakeVectorStore

from rag_assistant.config import Settings
from rag_assistant.container import ServiceContainer
from rag_assistant.errors import (
    ErrorKind,
    IngestionError,
    RagError,
    ServiceError,
    Stage,
    UnsupportedFormatError,
    ValidationError,
    service_stage,
)
from rag_assistant.retrieval.models import ScoredMatch


class TestErrors:
    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (ValidationError("bad"), ErrorKind.VALIDATION),
            (UnsupportedFormatError("nope"), ErrorKind.UNSUPPORTED_FORMAT),
            (ServiceError(Stage.RETRIEVAL, "down"), ErrorKind.SERVICE),
        ],
    )
    def test_every_error_has_a_kind(self, error: RagError, kind: ErrorKind) -> None:
        assert error.kind is kind

    def test_service_error_message_names_stage(self) -> None:
        err = ServiceError(Stage.EMBEDDING, "401 unauthorized")
        assert str(err) == "embedding failed: 401 unauthorized"
        assert err.detail == "401 unauthorized"

    def test_service_stage_wraps_and_chains(self) -> None:
        with pytest.raises(ServiceError) as info:
            with service_stage(Stage.GENERATION):
                raise KeyError("choices")
        assert info.value.stage is Stage.GENERATION
        assert isinstance(info.value.__cause__, KeyError)

    def test_service_stage_keeps_existing_labels(self) -> None:
        original = ServiceError(Stage.EMBEDDING, "boom")
        with pytest.raises(ServiceError) as info:
            with service_stage(Stage.RETRIEVAL):
                raise original
        assert info.value is original

    def test_service_stage_names_silent_exceptions(self) -> None:
        with pytest.raises(ServiceError, match="indexing failed: TimeoutError"):
            with service_stage(Stage.INDEXING):
                raise TimeoutError()

    def test_ingestion_error_reports_progress(self) -> None:
        err = IngestionError(Stage.INDEXING, "down", document_id="d", failed_batch=3, chunks_written=30)
        assert isinstance(err, ServiceError)
        assert err.last_committed_batch == 2
        assert err.chunks_written == 30


class TestServiceContainer:
    def test_wires_configuration(self) -> None:
        config = Settings(chunk_size=500, overlap_size=50, min_chunk_size=10, batch_size=4, top_k=5, max_tokens=99)
        container = ServiceContainer(
            embedder=FakeEmbedder(), store=FakeVectorStore(), generator=FakeGenerator(), config=config
        )

        assert container.ingestor.chunk_size == 500
        assert container.ingestor.overlap_size == 50
        assert container.ingestor.batch_size == 4
        assert container.retriever.default_k == 5
        assert container.orchestrator.top_k == 5
        assert container.orchestrator.max_tokens == 99

    def test_ingested_text_is_answerable(self) -> None:
        store = FakeVectorStore()
        generator = FakeGenerator()
        container = ServiceContainer(embedder=FakeEmbedder(), store=store, generator=generator)

        container.ingestor.process_document("The launch code is 1234.", "codes.txt")
        store.matches = [ScoredMatch(score=0.9, metadata=store.vectors[0].metadata)]
        result = container.orchestrator.answer("What is the launch code?", detailed=True)

        assert result.sources_used == ["codes.txt"]
        assert "The launch code is 1234." in generator.calls[0][1]

    def test_close_releases_store(self) -> None:
        store = FakeVectorStore()
        ServiceContainer(embedder=FakeEmbedder(), store=store, generator=FakeGenerator()).close()
        assert store.closed is True
