"""Content chunking tests."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from docscope.retrieval.chunking import chunk_content


def test_empty_content_yields_no_chunks():
    """Empty content produces an empty sequence."""
    assert chunk_content("") == []


def test_chunks_are_fixed_windows():
    """Every chunk but the last has exactly the window size."""
    content = "a" * 1234
    chunks = chunk_content(content, 500)

    assert [len(c.text) for c in chunks] == [500, 500, 234]
    assert [(c.start_index, c.end_index) for c in chunks] == [(0, 500), (500, 1000), (1000, 1234)]


def test_content_shorter_than_window_is_one_chunk():
    """Short content becomes a single chunk covering all of it."""
    chunks = chunk_content("hello", 500)

    assert len(chunks) == 1
    assert chunks[0].text == "hello"
    assert chunks[0].end_index == 5


def test_exact_multiple_has_no_empty_tail():
    """Content of exactly n windows gives n chunks."""
    chunks = chunk_content("x" * 1000, 500)

    assert len(chunks) == 2
    assert chunks[-1].end_index == 1000


def test_new_chunks_are_unscored():
    """Chunks start with a zero score."""
    assert all(c.score == 0.0 for c in chunk_content("abc" * 400))


def test_default_window_is_500():
    """Default window matches the search chunk size."""
    chunks = chunk_content("z" * 501)

    assert len(chunks) == 2
    assert len(chunks[0].text) == 500


def test_invalid_size_raises():
    """A window smaller than one character is a programming error."""
    with pytest.raises(ValueError):
        chunk_content("abc", 0)


@given(st.text(max_size=3000), st.integers(min_value=1, max_value=700))
@settings(max_examples=200)
def test_chunks_partition_content_property(content: str, size: int):
    """Property: chunks are contiguous and join back to the original content."""
    chunks = chunk_content(content, size)

    assert "".join(c.text for c in chunks) == content
    for current, following in zip(chunks, chunks[1:]):
        assert current.end_index == following.start_index
    for chunk in chunks:
        assert chunk.text == content[chunk.start_index : chunk.end_index]
        assert len(chunk.text) <= size
    if chunks:
        assert chunks[0].start_index == 0
        assert chunks[-1].end_index == len(content)
