"""Chat context endpoints."""

from fastapi import APIRouter, Depends

from docscope.api.deps import get_settings
from docscope.api.schemas import ContextRequest, ContextResponse, to_documents
from docscope.config import Config
from docscope.context.chat import build_chat_context

router = APIRouter(prefix="/api/context", tags=["context"])


# Sync endpoint: runs in the threadpool
@router.post("", response_model=ContextResponse)
def chat_context(
    request: ContextRequest,
    settings: Config = Depends(get_settings),
) -> ContextResponse:
    """Build the system message for a chat message over uploaded files."""
    documents = to_documents(request.documents)
    chat = build_chat_context(
        request.message,
        documents,
        room_name=request.room_name,
        selected_names=request.selected_names,
        max_context_tokens=request.max_context_tokens,
        config=settings.context,
    )
    return ContextResponse.from_chat(chat, files_total=len(documents))
