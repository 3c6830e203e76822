"""Ranking and context assembly for retrieved matches."""

from __future__ import annotations

from collections.abc import Sequence

from rag_assistant.retrieval.models import RetrievalResult, ScoredMatch

CONTEXT_SEPARATOR = "\n\n"


def rank(matches: Sequence[ScoredMatch]) -> list[ScoredMatch]:
    """Order *matches* by score, best first; ties keep their incoming order."""
    return sorted(matches, key=lambda m: m.score, reverse=True)


def assemble(matches: Sequence[ScoredMatch]) -> RetrievalResult:
    """Build the generation context and source list from *matches*.

    The store's own ordering is not trusted: matches are re-ranked before
    use.  Chunk texts are concatenated as-is (repeated texts stay
    repeated); only document names are deduplicated, by first occurrence.
    """
    ranked = rank(matches)

    texts: list[str] = []
    sources: list[str] = []
    for match in ranked:
        if match.text:
            texts.append(match.text)
        name = match.document_name
        if name and name not in sources:
            sources.append(name)

    return RetrievalResult(
        context=CONTEXT_SEPARATOR.join(texts),
        sources=sources,
        matches=ranked,
    )
