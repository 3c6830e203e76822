"""Paragraph-aware text chunking with character overlap."""

from __future__ import annotations

import re

from rag_assistant.ingestion.models import Chunk, SourceDocument

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP_SIZE = 200
DEFAULT_MIN_CHUNK_SIZE = 20

PARAGRAPH_SEPARATOR = "\n\n"

# One or more blank lines (whitespace-only lines count as blank).
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def _split_paragraphs(text: str) -> list[str]:
    paragraphs = _PARAGRAPH_BREAK.split(text)
    # A trailing separator yields no paragraph.
    while paragraphs and not paragraphs[-1]:
        paragraphs.pop()
    return paragraphs


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_size: int = DEFAULT_OVERLAP_SIZE,
    min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
) -> list[str]:
    """Split *text* into overlapping, paragraph-aligned chunks.

    Paragraphs are accumulated greedily until the next one would push the
    buffer past *chunk_size*; the buffer is then emitted and the next one
    is seeded with its last *overlap_size* characters.

    Parameters
    ----------
    text:
        Extracted document text. Callers reject empty text upstream.
    chunk_size:
        Soft upper bound on chunk length in characters. A single paragraph
        longer than this is kept whole, and an overlap-seeded chunk may
        exceed it by the overlap.
    overlap_size:
        Number of trailing characters carried into the next chunk.
    min_chunk_size:
        Chunks whose stripped length is at most this are dropped.

    Returns
    -------
    list[str]
        Chunks in document order. Text no longer than *chunk_size* is
        returned unchanged as the only chunk, even when it is shorter
        than *min_chunk_size*.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if overlap_size < 0 or min_chunk_size < 0:
        raise ValueError("overlap_size and min_chunk_size must be non-negative")
    if overlap_size >= chunk_size:
        raise ValueError(f"overlap_size ({overlap_size}) must be < chunk_size ({chunk_size})")

    if len(text) <= chunk_size:
        return [text]

    chunks: list[str] = []
    buffer = ""
    for paragraph in _split_paragraphs(text):
        if buffer and len(buffer) + len(paragraph) > chunk_size:
            chunks.append(buffer)
            if len(buffer) > overlap_size:
                buffer = buffer[len(buffer) - overlap_size :]
            else:
                buffer = ""

        if buffer:
            buffer += PARAGRAPH_SEPARATOR
        buffer += paragraph

    if buffer:
        chunks.append(buffer)

    return [chunk for chunk in chunks if len(chunk.strip()) > min_chunk_size]


def chunk_document(
    document: SourceDocument,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_size: int = DEFAULT_OVERLAP_SIZE,
    min_chunk_size: int = DEFAULT_MIN_CHUNK_SIZE,
) -> list[Chunk]:
    """Chunk *document* and attach provenance to every piece."""
    pieces = chunk_text(
        document.text,
        chunk_size=chunk_size,
        overlap_size=overlap_size,
        min_chunk_size=min_chunk_size,
    )
    return [
        Chunk(
            document_id=document.document_id,
            document_name=document.name,
            index=index,
            text=piece,
        )
        for index, piece in enumerate(piece for piece in pieces if piece)
    ]
