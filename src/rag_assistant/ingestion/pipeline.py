"""Write path — chunk a document, embed every chunk and index it batch by batch."""

from __future__ import annotations

import logging
from pathlib import Path

from rag_assistant.errors import IngestionError, ServiceError, Stage, ValidationError, service_stage
from rag_assistant.ingestion.chunker import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MIN_CHUNK_SIZE,
    DEFAULT_OVERLAP_SIZE,
    chunk_document,
)
from rag_assistant.ingestion.embedder import EmbeddingGateway
from rag_assistant.ingestion.loader import extract_text
from rag_assistant.ingestion.models import Chunk, IngestionReport, SourceDocument
from rag_assistant.retrieval.base import VectorStoreBase
from rag_assistant.retrieval.models import IndexedVector

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


class DocumentIngestor:
    """Turns extracted document text into indexed, embedded chunks.

    Batches are committed independently and sequentially: a failure in
    batch *n* leaves batches ``0 .. n-1`` in the store and is reported as
    an :class:`~rag_assistant.errors.IngestionError`.

    Parameters
    ----------
    embedder:
        Embedding gateway, one call per chunk.
    store:
        Target vector store, one ``upsert`` per batch.
    chunk_size, overlap_size, min_chunk_size:
        Forwarded to :func:`~rag_assistant.ingestion.chunker.chunk_text`.
    batch_size:
        Chunks per upsert.
    upload_dir:
        Staging directory for :meth:`ingest_file`.
    """

    def __init__(
        self,
        embedder: EmbeddingGateway,
        store: VectorStoreBase,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap_size: int = DEFAULT_OVERLAP_SIZE,
        min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
        batch_size: int = DEFAULT_BATCH_SIZE,
        upload_dir: str | Path = "uploads",
    ) -> None:
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._embedder = embedder
        self._store = store
        self.chunk_size = chunk_size
        self.overlap_size = overlap_size
        self.min_chunk_size = min_chunk_size
        self.batch_size = batch_size
        self.upload_dir = Path(upload_dir)

    # -- public API -----------------------------------------------------------

    def process_document(self, raw_text: str, file_name: str) -> IngestionReport:
        """Chunk, embed and index *raw_text* under the name *file_name*.

        Raises
        ------
        ValidationError
            The text is empty or whitespace only.
        IngestionError
            Embedding or indexing failed part-way; see ``last_committed_batch``.
        """
        if not raw_text or not raw_text.strip():
            logger.warning("Document appears to be empty: %s", file_name)
            raise ValidationError("Document contains no extractable text")

        logger.info("Processing document: %s", file_name)
        document = SourceDocument(name=file_name, text=raw_text)
        chunks = chunk_document(
            document,
            chunk_size=self.chunk_size,
            overlap_size=self.overlap_size,
            min_chunk_size=self.min_chunk_size,
        )
        logger.info("Document split into %d chunks", len(chunks))

        report = IngestionReport(document_id=document.document_id, document_name=file_name)
        if not chunks:
            logger.warning("No valid chunks generated from document: %s", file_name)
            return report

        for batch_index, start in enumerate(range(0, len(chunks), self.batch_size)):
            batch = chunks[start : start + self.batch_size]
            try:
                written = self._write_batch(batch)
            except ServiceError as exc:
                logger.error(
                    "Batch %d of document %s failed: %s", batch_index, document.document_id, exc.message
                )
                raise IngestionError(
                    exc.stage,
                    exc.detail,
                    document_id=document.document_id,
                    failed_batch=batch_index,
                    chunks_written=report.chunk_count,
                ) from exc
            report.chunk_count += len(batch)
            report.batches_written += 1
            logger.debug(
                "Stored batch %d (%d embeddings, %d upserted) for document %s",
                batch_index,
                len(batch),
                written,
                document.document_id,
            )

        logger.info("Successfully processed document: %s", file_name)
        return report

    def ingest_file(self, file_name: str, data: bytes) -> IngestionReport:
        """Extract the text of an uploaded file and :meth:`process_document` it."""
        if not data:
            raise ValidationError("File cannot be empty")
        text = extract_text(file_name, data, self.upload_dir)
        return self.process_document(text, file_name)

    # -- internals ------------------------------------------------------------

    def _write_batch(self, batch: list[Chunk]) -> int:
        vectors: list[IndexedVector] = []
        for chunk in batch:
            with service_stage(Stage.EMBEDDING):
                values = self._embedder.embed(chunk.text)
            vectors.append(
                IndexedVector.for_chunk(
                    document_id=chunk.document_id,
                    document_name=chunk.document_name,
                    chunk_index=chunk.index,
                    text=chunk.text,
                    values=values,
                )
            )

        with service_stage(Stage.INDEXING):
            return self._store.upsert(vectors)
