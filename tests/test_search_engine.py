"""Semantic search engine tests."""

import threading

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from docscope.documents import Document
from docscope.retrieval.engine import (
    SEARCH_FAILURE_MESSAGE,
    SearchCancelled,
    SearchFailure,
    batched,
    score_document,
    search,
    search_async,
)
from docscope.retrieval.scoring import KeywordOverlapScorer


class LetterScorer:
    """Scores a chunk by looking up its first character."""

    def __init__(self, table: dict[str, float]):
        self.table = table

    def score(self, query: str, text: str) -> float:
        return self.table.get(text[:1], 0.0)


class ExplodingScorer:
    """Raises for any chunk containing the trigger text."""

    def __init__(self, trigger: str = "boom"):
        self.trigger = trigger

    def score(self, query: str, text: str) -> float:
        if self.trigger in text:
            raise RuntimeError("scorer exploded")
        return 1.0


def test_repeated_keyword_document_is_found(make_document):
    """A document mentioning the query repeatedly is returned with a high score."""
    document = make_document("billing.txt", "invoice due. Pay the invoice now. invoice total.")

    results = search("invoice", [document])

    assert len(results) == 1
    assert results[0].document_id == document.id
    assert results[0].overall_score > 0.3


def test_empty_corpus_returns_empty_list():
    """Searching no documents is not an error."""
    assert search("anything", []) == []


def test_blank_query_returns_empty_list(make_document):
    """A blank query matches nothing."""
    assert search("   ", [make_document("a.txt", "invoice")]) == []


def test_unrelated_document_is_excluded(make_document):
    """Documents without a relevant chunk are omitted."""
    results = search("invoice", [make_document("a.txt", "weather report for tuesday")])

    assert results == []


def test_chunk_must_score_strictly_above_threshold(make_document):
    """A chunk scoring exactly the threshold is not relevant."""
    document = make_document("a.txt", "a" * 10)

    assert search("q", [document], scorer=LetterScorer({"a": 0.3}), chunk_size=10) == []
    assert len(search("q", [document], scorer=LetterScorer({"a": 0.31}), chunk_size=10)) == 1


def test_result_keeps_best_three_chunks_and_scores_all_relevant():
    """Only three chunks are kept but the overall score covers every relevant chunk."""
    content = "".join(letter * 10 for letter in "abcde")
    document = Document(id="1", name="a.txt", content=content)
    scorer = LetterScorer({"a": 0.9, "b": 0.5, "c": 0.4, "d": 0.8, "e": 0.2})

    result = score_document("q", document, scorer, chunk_size=10)

    assert result is not None
    assert [chunk.score for chunk in result.relevant_chunks] == [0.9, 0.8, 0.5]
    assert [chunk.start_index for chunk in result.relevant_chunks] == [0, 30, 10]
    assert result.overall_score == pytest.approx((0.9 + 0.5 + 0.4 + 0.8) / 4)


def test_equal_chunk_scores_keep_content_order():
    """Chunks with the same score stay in the order they appear."""
    document = Document(id="1", name="a.txt", content="a" * 30)

    result = score_document("q", document, LetterScorer({"a": 0.5}), chunk_size=10)

    assert result is not None
    assert [chunk.start_index for chunk in result.relevant_chunks] == [0, 10, 20]


def test_results_sorted_by_score_descending():
    """Higher scoring documents come first."""
    documents = [
        Document(id="low", name="low.txt", content="b" * 10),
        Document(id="high", name="high.txt", content="a" * 10),
    ]
    scorer = LetterScorer({"a": 0.9, "b": 0.5})

    results = search("q", documents, scorer=scorer, chunk_size=10)

    assert [r.document_id for r in results] == ["high", "low"]


def test_equal_scores_keep_corpus_order():
    """Ties are broken by position in the input."""
    documents = [Document(id=str(i), name=f"{i}.txt", content="a" * 10) for i in range(5)]

    results = search("q", documents, scorer=LetterScorer({"a": 0.7}), chunk_size=10)

    assert [r.document_id for r in results] == ["0", "1", "2", "3", "4"]


def test_scorer_failure_aborts_whole_search(make_document):
    """One failing document fails the search with no partial results."""
    documents = [make_document("ok.txt", "fine"), make_document("bad.txt", "boom")]

    with pytest.raises(SearchFailure, match=SEARCH_FAILURE_MESSAGE) as exc_info:
        search("q", documents, scorer=ExplodingScorer())

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_cancelled_search_raises(make_document):
    """A set cancel event stops the search before scoring."""
    event = threading.Event()
    event.set()

    with pytest.raises(SearchCancelled):
        search("invoice", [make_document("a.txt", "invoice")], cancel_event=event)


def test_unset_cancel_event_is_ignored(make_document):
    """An event that is never set does not affect results."""
    documents = [make_document("a.txt", "invoice")]

    assert search("invoice", documents, cancel_event=threading.Event()) == search(
        "invoice", documents
    )


def test_batched_splits_into_groups():
    """batched yields lists of at most n items."""
    assert list(batched(range(7), 3)) == [[0, 1, 2], [3, 4, 5], [6]]
    assert list(batched([], 3)) == []


@pytest.mark.parametrize("parallel_limit", [1, 2, 4, 16])
async def test_async_search_matches_sync_search(parallel_limit: int):
    """Concurrent scoring returns exactly the sequential ranking."""
    documents = [
        Document(id=str(i), name=f"{i}.txt", content=("invoice payment " * (i % 4)) + "misc " * i)
        for i in range(12)
    ]

    expected = search("invoice payment", documents)
    actual = await search_async("invoice payment", documents, parallel_limit=parallel_limit)

    assert actual == expected


async def test_async_search_empty_inputs():
    """Async search short-circuits the same way as sync search."""
    assert await search_async("", [Document(id="1", name="a", content="a")]) == []
    assert await search_async("query", []) == []


async def test_async_search_failure_is_wrapped(make_document):
    """A failing document fails the async search as a whole."""
    documents = [make_document(f"{i}.txt", "fine") for i in range(5)]
    documents.append(make_document("bad.txt", "boom"))

    with pytest.raises(SearchFailure, match=SEARCH_FAILURE_MESSAGE):
        await search_async("q", documents, scorer=ExplodingScorer(), parallel_limit=2)


words = st.sampled_from(["invoice", "payment", "tax", "refund", "report", "memo", "due"])
document_text = st.lists(words, max_size=80).map(" ".join)


@given(
    query=st.lists(words, min_size=1, max_size=4).map(" ".join),
    contents=st.lists(document_text, max_size=8),
)
@settings(max_examples=100)
def test_search_result_invariants_property(query: str, contents: list[str]):
    """Property: every result is relevant, bounded and correctly ordered."""
    documents = [
        Document(id=str(i), name=f"{i}.txt", content=content)
        for i, content in enumerate(contents)
    ]

    results = search(query, documents, scorer=KeywordOverlapScorer(), chunk_size=60)

    scores = [r.overall_score for r in results]
    assert scores == sorted(scores, reverse=True)
    for result in results:
        assert 0.3 < result.overall_score <= 1.0
        assert 1 <= len(result.relevant_chunks) <= 3
        chunk_scores = [chunk.score for chunk in result.relevant_chunks]
        assert chunk_scores == sorted(chunk_scores, reverse=True)
        assert all(score > 0.3 for score in chunk_scores)
