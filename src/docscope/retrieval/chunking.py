# src/docscope/retrieval/chunking.py
"""Fixed-window chunking of document content for relevance scoring."""

from dataclasses import dataclass

from docscope.constants.search import CHUNK_SIZE


@dataclass
class Chunk:
    """A contiguous slice of a document's content.

    Attributes:
        text: The text of the slice, ``content[start_index:end_index]``.
        start_index: Offset of the first character (inclusive).
        end_index: Offset after the last character (exclusive).
        score: Relevance score against the current query, 0.0 until scored.
    """

    text: str
    start_index: int
    end_index: int
    score: float = 0.0


def chunk_content(content: str, size: int = CHUNK_SIZE) -> list[Chunk]:
    """Split content into non-overlapping windows of ``size`` characters.

    The windows partition the content exactly: joining every chunk's text
    in order reproduces ``content``. Only the last chunk may be shorter.

    Args:
        content: Text to split.
        size: Window size in characters.

    Returns:
        Chunks in content order; empty for empty content.

    Raises:
        ValueError: If size is smaller than 1.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}")

    chunks: list[Chunk] = []
    for start in range(0, len(content), size):
        end = min(start + size, len(content))
        chunks.append(Chunk(text=content[start:end], start_index=start, end_index=end))
    return chunks
