"""System message assembly for chat requests.

Runs file selection and context budgeting, then wraps the result in the
system message sent to the generation service together with the user's
message.
"""

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from docscope.config import ContextConfig, load_settings
from docscope.context.budget import AssembledContext, assemble_context
from docscope.context.messages import (
    DOCUMENT_ASSISTANT_MESSAGE,
    base_preamble,
    file_context_header,
    room_assistant_message,
)
from docscope.context.selector import select_relevant_files
from docscope.context.tokens import estimate_tokens
from docscope.documents import Document


@dataclass
class ChatContext:
    """Everything the generation call needs besides the user's message.

    Attributes:
        system_message: Complete system message, file context included.
        context: Assembled file context, None when no file was shown.
        estimated_tokens: Estimated tokens of system message plus message.
    """

    system_message: str
    context: AssembledContext | None
    estimated_tokens: int


def build_chat_context(
    message: str,
    documents: Sequence[Document],
    *,
    room_name: str | None = None,
    selected_names: Collection[str] | None = None,
    max_context_tokens: int | None = None,
    config: ContextConfig | None = None,
) -> ChatContext:
    """Build the system message for a chat message over uploaded files.

    Args:
        message: The user's chat message.
        documents: Every file uploaded to the room.
        room_name: Chat room name used in the preamble.
        selected_names: Filenames the user explicitly picked, if any.
        max_context_tokens: Overrides the configured context budget.
        config: Context settings; loaded from settings when None.

    Returns:
        ChatContext for the generation call.
    """
    config = config or load_settings().context
    budget = max_context_tokens if max_context_tokens is not None else config.max_context_tokens

    if not documents:
        system_message = room_assistant_message(room_name)
        return ChatContext(
            system_message=system_message,
            context=None,
            estimated_tokens=estimate_tokens(system_message + message, config.chars_per_token),
        )

    relevant = select_relevant_files(
        message,
        documents,
        max_files=config.max_files,
        selected_names=selected_names,
        filename_weight=config.filename_match_weight,
        content_weight=config.content_match_weight,
        code_boost=config.code_file_boost,
    )

    context: AssembledContext | None = None
    file_context = ""
    if relevant:
        context = assemble_context(
            message,
            relevant,
            budget,
            preamble=base_preamble(len(documents), len(relevant), room_name),
            files_total=len(documents),
            min_chars_per_file=config.min_chars_per_file,
            chars_per_token=config.chars_per_token,
        )
        file_context = file_context_header(context.files_shown, context.files_total) + context.text

    system_message = DOCUMENT_ASSISTANT_MESSAGE + file_context
    return ChatContext(
        system_message=system_message,
        context=context,
        estimated_tokens=estimate_tokens(system_message + message, config.chars_per_token),
    )
