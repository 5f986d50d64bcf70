"""Keyword-overlap search over uploaded documents."""

from docscope.retrieval.chunking import Chunk, chunk_content
from docscope.retrieval.engine import (
    SearchCancelled,
    SearchFailure,
    SearchResult,
    search,
    search_async,
)
from docscope.retrieval.scoring import (
    KeywordOverlapScorer,
    RelevanceScorer,
    score_relevance,
)

__all__ = [
    "Chunk",
    "KeywordOverlapScorer",
    "RelevanceScorer",
    "SearchCancelled",
    "SearchFailure",
    "SearchResult",
    "chunk_content",
    "score_relevance",
    "search",
    "search_async",
]
