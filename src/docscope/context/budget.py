# src/docscope/context/budget.py
"""Token-budgeted assembly of file content into a prompt context.

The budget left after the preamble and the user's message is split evenly
between the files. A file that does not fit its share is reduced to its
declaration and comment lines when those fit, and cut at the character
limit otherwise.
"""

import logging
import re
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from docscope.constants.context import (
    CHARS_PER_TOKEN,
    KEY_DEFINITIONS_MARKER,
    MAX_CONTEXT_TOKENS,
    MIN_CHARS_PER_FILE,
    TRUNCATION_MARKER,
)
from docscope.context.messages import base_preamble
from docscope.context.tokens import estimate_tokens
from docscope.documents import Document

logger = logging.getLogger(__name__)

# Matched against stripped lines
DECLARATION_PATTERN = re.compile(
    r"^(class|function|def|public|private|interface|type|const|let|var)\s"
)
COMMENT_PREFIXES = ("//", "#")


class AssemblyCancelled(Exception):
    """Raised when context assembly is cancelled between files."""

    pass


@dataclass
class FileBlock:
    """One file's contribution to the assembled context.

    Attributes:
        name: Filename shown in the block header.
        content: Included content, before any marker.
        marker: KEY_DEFINITIONS_MARKER or TRUNCATION_MARKER when the file
            was shortened, None when included verbatim.
    """

    name: str
    content: str
    marker: str | None = None

    @property
    def truncated(self) -> bool:
        return self.marker is not None

    def render(self) -> str:
        body = self.content if self.marker is None else f"{self.content}\n\n{self.marker}"
        return f"--- {self.name} ---\n{body}"


@dataclass
class AssembledContext:
    """Context text built from a set of files.

    Attributes:
        text: File blocks joined by blank lines.
        files_shown: Number of files included.
        files_total: Number of files in the corpus the selection came from.
        max_chars_per_file: Character limit each file was held to.
        base_tokens: Estimated tokens of the preamble and message.
        blocks: Per-file blocks in output order.
    """

    text: str
    files_shown: int
    files_total: int
    max_chars_per_file: int = 0
    base_tokens: int = 0
    blocks: list[FileBlock] = field(default_factory=list)

    @property
    def estimated_tokens(self) -> int:
        """Estimated tokens of preamble, message and context text together."""
        return self.base_tokens + estimate_tokens(self.text)


def is_key_definition(line: str) -> bool:
    """Check whether a line declares something or is a comment."""
    stripped = line.strip()
    return bool(DECLARATION_PATTERN.match(stripped)) or stripped.startswith(COMMENT_PREFIXES)


def extract_key_definitions(content: str) -> list[str]:
    """Return the declaration and comment lines of content, in order."""
    return [line for line in content.split("\n") if is_key_definition(line)]


def fit_file_content(name: str, content: str, max_chars: int) -> FileBlock:
    """Fit one file into max_chars characters.

    Args:
        name: Filename.
        content: Full file content.
        max_chars: Character budget for this file.

    Returns:
        The verbatim content when it fits; otherwise its key definitions when
        they are strictly shorter than the budget; otherwise the first
        max_chars characters.
    """
    if len(content) <= max_chars:
        return FileBlock(name=name, content=content)

    key_lines = extract_key_definitions(content)
    if key_lines:
        outline = "\n".join(key_lines)
        if len(outline) < max_chars:
            return FileBlock(name=name, content=outline, marker=KEY_DEFINITIONS_MARKER)

    return FileBlock(name=name, content=content[:max_chars], marker=TRUNCATION_MARKER)


def max_chars_per_file(
    available_tokens: int,
    num_files: int,
    min_chars: int = MIN_CHARS_PER_FILE,
    chars_per_token: int = CHARS_PER_TOKEN,
) -> int:
    """Character budget for each of num_files sharing available_tokens.

    Never below min_chars, even when that overshoots the token budget.
    """
    tokens_per_file = available_tokens // num_files if num_files > 0 else 0
    return max(tokens_per_file * chars_per_token, min_chars)


def assemble_context(
    message: str,
    documents: Sequence[Document],
    max_context_tokens: int = MAX_CONTEXT_TOKENS,
    *,
    preamble: str | None = None,
    files_total: int | None = None,
    min_chars_per_file: int = MIN_CHARS_PER_FILE,
    chars_per_token: int = CHARS_PER_TOKEN,
    cancel_event: threading.Event | None = None,
) -> AssembledContext:
    """Pack documents into a context string under a token budget.

    Args:
        message: User message sent alongside the context.
        documents: Files to include, already selected, in output order.
        max_context_tokens: Budget for preamble, message and files.
        preamble: System preamble charged against the budget. Defaults to
            the base chat preamble for these file counts.
        files_total: Size of the corpus the documents were selected from.
            Defaults to len(documents).
        min_chars_per_file: Floor on each file's character budget.
        chars_per_token: Characters per estimated token.
        cancel_event: When set, assembly stops before the next file.

    Returns:
        AssembledContext with one block per document.

    Raises:
        AssemblyCancelled: If cancel_event is set during assembly.
    """
    num_files = len(documents)
    total = files_total if files_total is not None else num_files
    if preamble is None:
        preamble = base_preamble(files_total=total, files_shown=num_files)

    base_tokens = estimate_tokens(preamble, chars_per_token) + estimate_tokens(
        message, chars_per_token
    )
    available = max(0, max_context_tokens - base_tokens)
    max_chars = max_chars_per_file(available, num_files, min_chars_per_file, chars_per_token)

    if available == 0 and num_files:
        logger.warning(
            f"Context budget exhausted by preamble and message ({base_tokens} tokens); "
            f"including {num_files} files at {max_chars} chars each"
        )

    blocks: list[FileBlock] = []
    for index, document in enumerate(documents):
        if cancel_event is not None and cancel_event.is_set():
            raise AssemblyCancelled(f"Context assembly cancelled after {index} files")
        blocks.append(fit_file_content(document.name, document.content, max_chars))

    text = "\n\n".join(block.render() for block in blocks)
    truncated = sum(1 for block in blocks if block.truncated)
    logger.debug(
        f"Context: {num_files}/{total} files, {max_chars} chars per file, "
        f"{truncated} shortened, ~{base_tokens + estimate_tokens(text, chars_per_token)} tokens"
    )

    return AssembledContext(
        text=text,
        files_shown=num_files,
        files_total=total,
        max_chars_per_file=max_chars,
        base_tokens=base_tokens,
        blocks=blocks,
    )
