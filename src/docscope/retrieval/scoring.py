"""Relevance scoring between a query and a piece of text.

The default scorer is a keyword-overlap heuristic. Anything implementing
:class:`RelevanceScorer` (an embeddings-based scorer, for instance) can be
passed to the search engine instead.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RelevanceScorer(Protocol):
    """Protocol for query/text relevance scoring."""

    def score(self, query: str, text: str) -> float:
        """Score how relevant text is to query.

        Args:
            query: User query.
            text: Candidate text, usually a chunk.

        Returns:
            Relevance in [0, 1].
        """
        ...


def _tokenize(text: str) -> list[str]:
    return text.lower().split()


def score_relevance(query: str, text: str) -> float:
    """Score keyword overlap between query and text.

    A query word matches when some word of the text contains it, or is
    contained in it. The score is the fraction of query words that match.

    Args:
        query: User query.
        text: Candidate text.

    Returns:
        Fraction of matching query words; 0.0 for an empty query.
    """
    query_words = _tokenize(query)
    if not query_words:
        return 0.0

    text_words = set(_tokenize(text))
    matches = sum(
        1
        for word in query_words
        if any(word in text_word or text_word in word for text_word in text_words)
    )
    return matches / max(1, len(query_words))


class KeywordOverlapScorer:
    """Default scorer backed by :func:`score_relevance`."""

    def score(self, query: str, text: str) -> float:
        return score_relevance(query, text)
