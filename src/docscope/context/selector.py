"""Relevant file selection for large corpora.

When more files are uploaded than fit in a chat request, files are ranked
by how many words of the message appear in their name and content, and
only the best ones are passed on to context assembly.
"""

import logging
from collections.abc import Collection, Sequence

from docscope.constants.context import (
    CODE_FILE_BOOST,
    CONTENT_MATCH_WEIGHT,
    FILENAME_MATCH_WEIGHT,
    MAX_FILES,
)
from docscope.constants.files import CODE_EXTENSIONS
from docscope.documents import Document

logger = logging.getLogger(__name__)


def message_words(message: str) -> list[str]:
    """Lowercase and whitespace-split a chat message."""
    return message.lower().split()


def score_file(
    words: Sequence[str],
    document: Document,
    filename_weight: int = FILENAME_MATCH_WEIGHT,
    content_weight: int = CONTENT_MATCH_WEIGHT,
    code_boost: int = CODE_FILE_BOOST,
) -> int:
    """Score a document against the words of a message.

    Each word scores filename_weight if the filename contains it and
    content_weight if the content contains it, counted once per word
    regardless of how often it occurs. Source files get code_boost on top.
    """
    name = document.name.lower()
    content = document.content.lower()

    score = 0
    for word in words:
        if word in name:
            score += filename_weight
        if word in content:
            score += content_weight

    if document.extension in CODE_EXTENSIONS:
        score += code_boost

    return score


def select_relevant_files(
    message: str,
    documents: Sequence[Document],
    max_files: int = MAX_FILES,
    selected_names: Collection[str] | None = None,
    *,
    filename_weight: int = FILENAME_MATCH_WEIGHT,
    content_weight: int = CONTENT_MATCH_WEIGHT,
    code_boost: int = CODE_FILE_BOOST,
) -> list[Document]:
    """Pick the documents worth showing for a message.

    Args:
        message: Chat message the context is built for.
        documents: Full corpus, in upload order.
        max_files: Maximum number of documents returned.
        selected_names: Filenames the user explicitly picked. When given,
            only those documents are considered.
        filename_weight: Score for a message word found in a filename.
        content_weight: Score for a message word found in file content.
        code_boost: Score added to source files.

    Returns:
        At most max_files documents. Corpora within the limit come back
        unchanged; larger ones are ranked by score with ties kept in
        upload order.
    """
    candidates = list(documents)
    if selected_names:
        names = set(selected_names)
        candidates = [document for document in candidates if document.name in names]

    if len(candidates) <= max_files:
        return candidates

    words = message_words(message)
    scored = [
        (score_file(words, document, filename_weight, content_weight, code_boost), document)
        for document in candidates
    ]
    # sorted() is stable, so equal scores keep upload order
    ranked = sorted(scored, key=lambda pair: pair[0], reverse=True)
    selected = [document for _, document in ranked[:max_files]]

    logger.debug(
        f"File selection: kept {len(selected)}/{len(candidates)} files "
        f"(top score {ranked[0][0]}, cutoff {ranked[max_files - 1][0]})"
    )
    return selected
