"""Error kinds raised by the ingestion and question-answering paths.

Every error carries a :class:`ErrorKind` value in ``kind`` so that boundary
layers can branch on ``exc.kind`` instead of walking the class hierarchy::

    try:
        orchestrator.answer(question, detailed=True)
    except RagError as exc:
        status = STATUS_BY_KIND[exc.kind]
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    SERVICE = "service"
    UNSUPPORTED_FORMAT = "unsupported_format"


class Stage(str, Enum):
    """Pipeline stage that talks to an external collaborator."""

    EXTRACTION = "extraction"
    EMBEDDING = "embedding"
    INDEXING = "indexing"
    RETRIEVAL = "retrieval"
    GENERATION = "generation"


class RagError(Exception):
    """Base class for every error surfaced to the boundary layer."""

    kind: ErrorKind = ErrorKind.SERVICE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RagError):
    """Empty document text, empty question and similar bad input."""

    kind = ErrorKind.VALIDATION


class UnsupportedFormatError(RagError):
    """The uploaded file type has no text extractor."""

    kind = ErrorKind.UNSUPPORTED_FORMAT


class ServiceError(RagError):
    """An embedding, vector-store, extraction or generation call failed.

    Parameters
    ----------
    stage:
        The stage whose collaborator failed.
    detail:
        Human-readable description of the underlying failure.
    """

    kind = ErrorKind.SERVICE

    def __init__(self, stage: Stage, detail: str) -> None:
        super().__init__(f"{stage.value} failed: {detail}")
        self.stage = stage
        self.detail = detail


class IngestionError(ServiceError):
    """A batch of a document could not be embedded or written.

    Batches before the failing one remain persisted, so callers can decide
    whether to resume from ``last_committed_batch + 1`` or discard the
    document.

    Attributes
    ----------
    document_id:
        Identifier assigned to the document being ingested.
    failed_batch:
        Index of the batch that failed.
    last_committed_batch:
        Index of the last fully written batch, ``None`` when nothing was written.
    chunks_written:
        Number of chunks persisted before the failure.
    """

    def __init__(
        self,
        stage: Stage,
        detail: str,
        *,
        document_id: str,
        failed_batch: int,
        chunks_written: int,
    ) -> None:
        super().__init__(stage, detail)
        self.document_id = document_id
        self.failed_batch = failed_batch
        self.last_committed_batch = failed_batch - 1 if failed_batch > 0 else None
        self.chunks_written = chunks_written


@contextmanager
def service_stage(stage: Stage) -> Iterator[None]:
    """Re-raise any non-:class:`RagError` exception as ``ServiceError(stage)``."""
    try:
        yield
    except RagError:
        raise
    except Exception as exc:
        raise ServiceError(stage, str(exc) or type(exc).__name__) from exc
