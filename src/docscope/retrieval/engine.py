# src/docscope/retrieval/engine.py
"""Keyword-overlap semantic search over a document corpus.

Every document is cut into fixed windows, every window is scored against
the query, and documents are ranked by the mean score of their relevant
windows. The corpus is supplied per call; nothing is indexed or cached.
"""

import asyncio
import logging
import threading
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from itertools import islice

from docscope.constants.search import (
    CHUNK_SIZE,
    MAX_CHUNKS_PER_DOCUMENT,
    PARALLEL_LIMIT,
    RELEVANCE_THRESHOLD,
)
from docscope.documents import Document
from docscope.retrieval.chunking import Chunk, chunk_content
from docscope.retrieval.scoring import KeywordOverlapScorer, RelevanceScorer

logger = logging.getLogger(__name__)

SEARCH_FAILURE_MESSAGE = "Failed to perform semantic search"


class SearchFailure(Exception):
    """Raised when scoring any document fails; no partial results are returned."""

    pass


class SearchCancelled(Exception):
    """Raised when a synchronous search is cancelled between documents."""

    pass


@dataclass
class SearchResult:
    """Search hit for a single document.

    Attributes:
        document_id: Id of the matching document.
        document_name: Name of the matching document.
        relevant_chunks: Best relevant chunks, highest score first.
        overall_score: Mean score of all relevant chunks of the document,
            including those not kept in relevant_chunks.
    """

    document_id: str
    document_name: str
    relevant_chunks: list[Chunk] = field(default_factory=list)
    overall_score: float = 0.0


def batched(iterable, n: int) -> Iterator[list]:
    """Batch an iterable into lists of up to n items."""
    it = iter(iterable)
    while batch := list(islice(it, n)):
        yield batch


def score_document(
    query: str,
    document: Document,
    scorer: RelevanceScorer,
    chunk_size: int = CHUNK_SIZE,
    threshold: float = RELEVANCE_THRESHOLD,
    max_chunks: int = MAX_CHUNKS_PER_DOCUMENT,
) -> SearchResult | None:
    """Score one document against a query.

    Args:
        query: Search query.
        document: Document to score.
        scorer: Relevance scorer applied to each chunk.
        chunk_size: Characters per chunk.
        threshold: Chunks must score strictly above this to be relevant.
        max_chunks: Maximum chunks kept in the result.

    Returns:
        SearchResult, or None when no chunk is relevant.
    """
    relevant: list[Chunk] = []
    for chunk in chunk_content(document.content, chunk_size):
        chunk.score = scorer.score(query, chunk.text)
        if chunk.score > threshold:
            relevant.append(chunk)

    if not relevant:
        return None

    overall_score = sum(chunk.score for chunk in relevant) / len(relevant)
    # sorted() is stable, so equal scores keep content order
    top_chunks = sorted(relevant, key=lambda c: c.score, reverse=True)[:max_chunks]

    return SearchResult(
        document_id=document.id,
        document_name=document.name,
        relevant_chunks=top_chunks,
        overall_score=overall_score,
    )


def _rank(scored: list[tuple[int, SearchResult | None]]) -> list[SearchResult]:
    """Order results by score, then by original document position."""
    hits = [(index, result) for index, result in scored if result is not None]
    hits.sort(key=lambda pair: (-pair[1].overall_score, pair[0]))
    return [result for _, result in hits]


def search(
    query: str,
    documents: Sequence[Document],
    *,
    scorer: RelevanceScorer | None = None,
    chunk_size: int = CHUNK_SIZE,
    threshold: float = RELEVANCE_THRESHOLD,
    max_chunks: int = MAX_CHUNKS_PER_DOCUMENT,
    cancel_event: threading.Event | None = None,
) -> list[SearchResult]:
    """Search documents for chunks relevant to a query.

    Args:
        query: Search query. Blank queries match nothing.
        documents: Corpus to search, in caller order.
        scorer: Relevance scorer; keyword overlap when None.
        chunk_size: Characters per chunk.
        threshold: Chunks must score strictly above this to be relevant.
        max_chunks: Maximum chunks kept per document.
        cancel_event: When set, the search stops before the next document.

    Returns:
        Matching documents sorted by overall score, highest first. Equal
        scores keep the corpus order.

    Raises:
        SearchFailure: If scoring any document raises.
        SearchCancelled: If cancel_event is set during the search.
    """
    if not query.strip() or not documents:
        return []

    scorer = scorer or KeywordOverlapScorer()
    scored: list[tuple[int, SearchResult | None]] = []

    for index, document in enumerate(documents):
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Search cancelled after {index}/{len(documents)} documents")
            raise SearchCancelled(f"Search cancelled after {index} documents")
        try:
            result = score_document(query, document, scorer, chunk_size, threshold, max_chunks)
        except Exception as e:
            logger.error(f"Scoring failed for document {document.id}: {e}", exc_info=True)
            raise SearchFailure(SEARCH_FAILURE_MESSAGE) from e
        scored.append((index, result))

    results = _rank(scored)
    logger.debug(f"Search: {len(results)}/{len(documents)} documents matched '{query[:50]}'")
    return results


async def search_async(
    query: str,
    documents: Sequence[Document],
    *,
    scorer: RelevanceScorer | None = None,
    chunk_size: int = CHUNK_SIZE,
    threshold: float = RELEVANCE_THRESHOLD,
    max_chunks: int = MAX_CHUNKS_PER_DOCUMENT,
    parallel_limit: int = PARALLEL_LIMIT,
) -> list[SearchResult]:
    """Search documents, scoring up to parallel_limit documents at once.

    Documents are scored in worker threads. Results are merged by score and
    original position, so the ordering matches :func:`search` regardless of
    completion order. Cancelling the awaiting task abandons the remaining
    batches.

    Raises:
        SearchFailure: If scoring any document raises.
    """
    if not query.strip() or not documents:
        return []

    scorer = scorer or KeywordOverlapScorer()
    indexed = list(enumerate(documents))
    scored: list[tuple[int, SearchResult | None]] = []

    for batch in batched(indexed, max(1, parallel_limit)):
        tasks = [
            asyncio.to_thread(
                score_document, query, document, scorer, chunk_size, threshold, max_chunks
            )
            for _, document in batch
        ]
        try:
            batch_results = await asyncio.gather(*tasks)
        except Exception as e:
            logger.error(f"Scoring failed during async search: {e}", exc_info=True)
            raise SearchFailure(SEARCH_FAILURE_MESSAGE) from e
        scored.extend((index, result) for (index, _), result in zip(batch, batch_results))

    results = _rank(scored)
    logger.debug(
        f"Async search: {len(results)}/{len(documents)} documents matched '{query[:50]}' "
        f"(parallel_limit={parallel_limit})"
    )
    return results
