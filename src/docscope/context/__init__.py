"""Chat context assembly: file selection, token budgeting, system messages."""

from docscope.context.budget import (
    AssembledContext,
    AssemblyCancelled,
    FileBlock,
    assemble_context,
    extract_key_definitions,
    fit_file_content,
)
from docscope.context.chat import ChatContext, build_chat_context
from docscope.context.selector import score_file, select_relevant_files
from docscope.context.tokens import estimate_tokens

__all__ = [
    "AssembledContext",
    "AssemblyCancelled",
    "ChatContext",
    "FileBlock",
    "assemble_context",
    "build_chat_context",
    "estimate_tokens",
    "extract_key_definitions",
    "fit_file_content",
    "score_file",
    "select_relevant_files",
]
