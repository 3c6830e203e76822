"""Unit tests for ranking and context assembly."""

from __future__ import annotations

from conftest import make_match

from rag_assistant.retrieval.assembler import assemble, rank
from rag_assistant.retrieval.models import ScoredMatch


def test_empty_matches_give_empty_result() -> None:
    result = assemble([])
    assert result.context == ""
    assert result.sources == []
    assert result.matches == []


def test_context_follows_score_not_store_order() -> None:
    matches = [make_match(0.7, "b"), make_match(0.9, "a"), make_match(0.5, "c")]
    assert assemble(matches).context == "a\n\nb\n\nc"


def test_sources_deduplicated_by_first_occurrence() -> None:
    # Store order is shuffled; by descending score the names read A, B, A, C.
    matches = [
        make_match(0.6, "a2", "A"),
        make_match(0.9, "a1", "A"),
        make_match(0.5, "c1", "C"),
        make_match(0.8, "b1", "B"),
    ]
    assert assemble(matches).sources == ["A", "B", "C"]


def test_equal_scores_keep_store_order() -> None:
    matches = [make_match(0.5, "first", "X"), make_match(0.5, "second", "Y"), make_match(0.9, "top", "Z")]
    result = assemble(matches)

    assert result.context == "top\n\nfirst\n\nsecond"
    assert result.sources == ["Z", "X", "Y"]


def test_duplicate_chunks_are_not_deduplicated() -> None:
    matches = [make_match(0.9, "same text", "A"), make_match(0.8, "same text", "A")]
    result = assemble(matches)

    assert result.context == "same text\n\nsame text"
    assert result.sources == ["A"]


def test_matches_without_metadata_add_nothing() -> None:
    matches = [ScoredMatch(score=0.99), make_match(0.5, "kept", "A")]
    result = assemble(matches)

    assert result.context == "kept"
    assert result.sources == ["A"]
    assert len(result.matches) == 2


def test_rank_returns_matches_best_first() -> None:
    matches = [make_match(0.1, "x"), make_match(0.3, "y"), make_match(0.2, "z")]
    assert [m.score for m in rank(matches)] == [0.3, 0.2, 0.1]
