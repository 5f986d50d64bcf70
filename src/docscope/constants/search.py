"""Semantic search configuration.

These settings control the keyword-overlap search used by the search API
and by contextual suggestions. Documents are cut into fixed windows, each
window is scored against the query, and only windows above the relevance
threshold count towards a document's score.
"""

# =============================================================================
# Chunking
# =============================================================================
# Documents are split into contiguous, non-overlapping windows of
# CHUNK_SIZE characters. The last window of a document may be shorter.

CHUNK_SIZE = 500

# =============================================================================
# Relevance
# =============================================================================
# A chunk is relevant when its score is strictly greater than
# RELEVANCE_THRESHOLD. Documents without a relevant chunk are dropped from
# the results. At most MAX_CHUNKS_PER_DOCUMENT chunks are returned per
# document, best first.

RELEVANCE_THRESHOLD = 0.3
MAX_CHUNKS_PER_DOCUMENT = 3

# =============================================================================
# Concurrency
# =============================================================================
# Per-document scoring has no shared state, so the async search fans it out
# to worker threads. PARALLEL_LIMIT bounds how many documents are scored at
# once.

PARALLEL_LIMIT = 4

# =============================================================================
# Suggestions
# =============================================================================
# Contextual suggestions quote the best chunk of the top
# SUGGESTION_DOCUMENTS search results, cut to SNIPPET_LENGTH characters.

SUGGESTION_DOCUMENTS = 3
SNIPPET_LENGTH = 200
