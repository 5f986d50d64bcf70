"""System message templates for chat requests."""

BASE_PREAMBLE_TEMPLATE = (
    'You are a helpful AI assistant in the "{room_name}" chat room. '
    "The user has uploaded {files_total} files (showing {files_shown} most relevant). "
    "Use the information from these files to answer questions when relevant. "
    "Always cite which file you're referencing."
)

DOCUMENT_ASSISTANT_MESSAGE = (
    "You are an AI assistant that helps users with document analysis, answering "
    "questions, and providing insights based on uploaded documents, including code "
    "files, documents, and other text-based content. Use the information from these "
    "files to answer questions when relevant. Always cite which file you're "
    "referencing when using information from the files. For code files, you can help "
    "explain, debug, review, or suggest improvements."
)

ROOM_ASSISTANT_TEMPLATE = (
    'You are a helpful AI assistant in the "{room_name}" chat room. '
    "Provide professional, concise, and helpful responses about business operations, "
    "projects, and general inquiries."
)

FILE_CONTEXT_HEADER_TEMPLATE = "\n\nContext from files ({files_shown}/{files_total} shown):\n"

DEFAULT_ROOM_NAME = "General"


def base_preamble(files_total: int, files_shown: int, room_name: str | None = None) -> str:
    """Render the preamble whose size is charged against the context budget."""
    return BASE_PREAMBLE_TEMPLATE.format(
        room_name=room_name or DEFAULT_ROOM_NAME,
        files_total=files_total,
        files_shown=files_shown,
    )


def file_context_header(files_shown: int, files_total: int) -> str:
    return FILE_CONTEXT_HEADER_TEMPLATE.format(files_shown=files_shown, files_total=files_total)


def room_assistant_message(room_name: str | None = None) -> str:
    return ROOM_ASSISTANT_TEMPLATE.format(room_name=room_name or DEFAULT_ROOM_NAME)
