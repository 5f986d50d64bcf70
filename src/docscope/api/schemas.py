"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field

from docscope.context.chat import ChatContext
from docscope.documents import Document
from docscope.generation.schemas import ChatMessage, DocumentBrief
from docscope.retrieval.engine import SearchResult


class DocumentIn(BaseModel):
    """A document supplied by the caller's document store."""

    id: str = Field(..., description="Document id")
    name: str = Field(..., description="Filename, including extension")
    content: str = Field(..., description="Extracted text content")
    size_bytes: int | None = Field(None, ge=0, description="Upload size in bytes")

    def to_document(self) -> Document:
        return Document.from_mapping(self.model_dump())


def to_documents(documents: list[DocumentIn]) -> list[Document]:
    return [document.to_document() for document in documents]


class SearchRequest(BaseModel):
    """Request for semantic search."""

    query: str = Field(..., description="Search query; blank queries match nothing")
    documents: list[DocumentIn] = Field(default_factory=list, description="Corpus to search")


class ChunkOut(BaseModel):
    """A relevant slice of a document."""

    text: str
    start_index: int
    end_index: int
    score: float


class SearchResultOut(BaseModel):
    """Search hit for a single document."""

    document_id: str
    document_name: str
    relevant_chunks: list[ChunkOut]
    overall_score: float

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultOut":
        return cls(
            document_id=result.document_id,
            document_name=result.document_name,
            relevant_chunks=[
                ChunkOut(
                    text=chunk.text,
                    start_index=chunk.start_index,
                    end_index=chunk.end_index,
                    score=chunk.score,
                )
                for chunk in result.relevant_chunks
            ],
            overall_score=result.overall_score,
        )


class SearchResponse(BaseModel):
    """Search response with results."""

    query: str
    results: list[SearchResultOut]
    total: int


class ContextRequest(BaseModel):
    """Request to build the system message for a chat message."""

    message: str = Field(..., description="The user's chat message")
    documents: list[DocumentIn] = Field(default_factory=list, description="Uploaded files")
    max_context_tokens: int | None = Field(
        None, ge=1, description="Override the configured context budget"
    )
    selected_names: list[str] | None = Field(
        None, description="Filenames the user explicitly picked"
    )
    room_name: str | None = Field(None, description="Chat room name")


class ContextResponse(BaseModel):
    """System message and context statistics."""

    system_message: str
    context: str
    files_shown: int
    files_total: int
    estimated_tokens: int

    @classmethod
    def from_chat(cls, chat: ChatContext, files_total: int) -> "ContextResponse":
        return cls(
            system_message=chat.system_message,
            context=chat.context.text if chat.context else "",
            files_shown=chat.context.files_shown if chat.context else 0,
            files_total=files_total,
            estimated_tokens=chat.estimated_tokens,
        )


class MessageSuggestionsRequest(BaseModel):
    """Request for suggestions grounded in matching documents."""

    message: str = Field(..., min_length=1)
    documents: list[DocumentIn] = Field(default_factory=list)


class ConversationSuggestionsRequest(BaseModel):
    """Request for suggestions based on the recent conversation."""

    recent_messages: list[ChatMessage] = Field(default_factory=list)
    documents: list[DocumentBrief] = Field(default_factory=list)


class SuggestionsResponse(BaseModel):
    suggestions: list[str]


class SummaryRequest(BaseModel):
    document: DocumentIn


class AnalysisRequest(BaseModel):
    documents: list[DocumentIn] = Field(..., min_length=1)


class MinutesRequest(BaseModel):
    transcript: str = Field(..., min_length=1)
