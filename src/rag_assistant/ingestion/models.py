"""Domain models for ingested documents and their chunks."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class SourceDocument(BaseModel):
    """A document as extracted from an upload.

    Attributes
    ----------
    document_id:
        Opaque unique token; a fresh UUID4 per ingestion.
    name:
        Original file name, reported back to users as the answer source.
    text:
        Raw extracted text.
    """

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    text: str


class Chunk(BaseModel):
    """One overlapping text window of a :class:`SourceDocument`."""

    model_config = ConfigDict(frozen=True)

    document_id: str
    document_name: str
    index: int = Field(ge=0)
    text: str = Field(min_length=1)


class IngestionReport(BaseModel):
    """Summary returned once every batch of a document has been written."""

    document_id: str
    document_name: str
    chunk_count: int = 0
    batches_written: int = 0
