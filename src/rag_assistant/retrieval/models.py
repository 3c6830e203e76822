"""Domain models for indexed vectors, scored matches and assembled context."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, Field

# Persisted metadata keys; existing indexes rely on these exact names.
DOCUMENT_ID = "document_id"
DOCUMENT_NAME = "document_name"
CHUNK_INDEX = "chunk_index"
TEXT = "text"


def new_vector_id(document_id: str) -> str:
    """Return ``<document_id>-<uuid4>``, unique across repeated ingestions."""
    return f"{document_id}-{uuid4()}"


class IndexedVector(BaseModel):
    """The unit persisted in the vector store.

    Attributes
    ----------
    id:
        Unique vector identifier, see :func:`new_vector_id`.
    values:
        The chunk embedding.
    metadata:
        String-valued provenance: ``document_id``, ``document_name``,
        ``chunk_index`` and ``text``.
    """

    id: str
    values: list[float]
    metadata: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def for_chunk(
        cls,
        *,
        document_id: str,
        document_name: str,
        chunk_index: int,
        text: str,
        values: list[float],
    ) -> IndexedVector:
        return cls(
            id=new_vector_id(document_id),
            values=values,
            metadata={
                DOCUMENT_ID: document_id,
                DOCUMENT_NAME: document_name,
                CHUNK_INDEX: str(chunk_index),
                TEXT: text,
            },
        )


class ScoredMatch(BaseModel):
    """One similarity-query hit. Higher ``score`` means more relevant."""

    score: float
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.metadata.get(TEXT, "")

    @property
    def document_name(self) -> str:
        return self.metadata.get(DOCUMENT_NAME, "")


class RetrievalResult(BaseModel):
    """Context handed to the generator, with the documents it came from.

    Attributes
    ----------
    context:
        Matched chunk texts, best first, separated by blank lines.
    sources:
        Document names in first-seen order, without duplicates.
    matches:
        The matches in the order they were consumed.
    """

    context: str = ""
    sources: list[str] = Field(default_factory=list)
    matches: list[ScoredMatch] = Field(default_factory=list)
