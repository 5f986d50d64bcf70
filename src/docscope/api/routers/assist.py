"""Assistant endpoints backed by the LLM."""

from fastapi import APIRouter, Depends, HTTPException, status

from docscope.api.deps import get_assistant
from docscope.api.schemas import (
    AnalysisRequest,
    ConversationSuggestionsRequest,
    MessageSuggestionsRequest,
    MinutesRequest,
    SuggestionsResponse,
    SummaryRequest,
    to_documents,
)
from docscope.generation.assistant import AssistantError, AssistantService
from docscope.generation.schemas import (
    CrossDocumentAnalysis,
    DocumentSummary,
    MeetingMinutes,
)

router = APIRouter(prefix="/api/assist", tags=["assist"])


def _bad_gateway(e: AssistantError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/suggestions", response_model=SuggestionsResponse)
async def message_suggestions(
    request: MessageSuggestionsRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> SuggestionsResponse:
    """Suggest follow-ups for a message using the documents it matches."""
    suggestions = await assistant.suggest_for_message(
        request.message, to_documents(request.documents)
    )
    return SuggestionsResponse(suggestions=suggestions)


@router.post("/suggestions/conversation", response_model=SuggestionsResponse)
async def conversation_suggestions(
    request: ConversationSuggestionsRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> SuggestionsResponse:
    """Suggest what to ask next given the recent conversation."""
    suggestions = await assistant.suggest_from_conversation(
        request.recent_messages, request.documents
    )
    return SuggestionsResponse(suggestions=suggestions)


@router.post("/summary", response_model=DocumentSummary)
async def summarize(
    request: SummaryRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> DocumentSummary:
    try:
        return await assistant.summarize_document(request.document.to_document())
    except AssistantError as e:
        raise _bad_gateway(e) from e


@router.post("/analysis", response_model=CrossDocumentAnalysis)
async def analyze(
    request: AnalysisRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> CrossDocumentAnalysis:
    try:
        return await assistant.analyze_documents(to_documents(request.documents))
    except AssistantError as e:
        raise _bad_gateway(e) from e


@router.post("/minutes", response_model=MeetingMinutes)
async def meeting_minutes(
    request: MinutesRequest,
    assistant: AssistantService = Depends(get_assistant),
) -> MeetingMinutes:
    try:
        return await assistant.generate_meeting_minutes(request.transcript)
    except AssistantError as e:
        raise _bad_gateway(e) from e
