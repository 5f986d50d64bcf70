"""Search endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from docscope.api.deps import get_settings
from docscope.api.schemas import (
    SearchRequest,
    SearchResponse,
    SearchResultOut,
    to_documents,
)
from docscope.config import Config
from docscope.retrieval.engine import SEARCH_FAILURE_MESSAGE, SearchFailure, search_async

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("", response_model=SearchResponse)
async def semantic_search(
    request: SearchRequest,
    settings: Config = Depends(get_settings),
) -> SearchResponse:
    """Rank the supplied documents by keyword overlap with the query."""
    try:
        results = await search_async(
            request.query,
            to_documents(request.documents),
            chunk_size=settings.search.chunk_size,
            threshold=settings.search.relevance_threshold,
            max_chunks=settings.search.max_chunks_per_document,
            parallel_limit=settings.search.parallel_limit,
        )
    except SearchFailure as e:
        logger.error(f"Search request failed: {e.__cause__!r}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=SEARCH_FAILURE_MESSAGE,
        ) from e

    return SearchResponse(
        query=request.query,
        results=[SearchResultOut.from_result(result) for result in results],
        total=len(results),
    )
