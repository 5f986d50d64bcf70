"""Assistant request and response schemas."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A message from the room's recent conversation."""

    sender: str = Field(..., description="Display name of the author")
    content: str = Field(..., description="Message text")


class DocumentBrief(BaseModel):
    """Short description of a document offered as suggestion context."""

    name: str = Field(..., description="Document filename")
    summary: str = Field("", description="One-line summary of the document")


class DocumentSummary(BaseModel):
    """LLM-generated summary of one document."""

    id: str = Field(..., description="Id of the summarized document")
    title: str = Field(..., description="Title, defaults to the filename")
    summary: str = Field(..., description="Two to three paragraph summary")
    key_points: list[str] = Field(default_factory=list, description="Key points")
    topics: list[str] = Field(default_factory=list, description="Main topics")
    word_count: int = Field(0, description="Estimated word count")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the summary was generated",
    )


class CrossDocumentAnalysis(BaseModel):
    """Themes and differences across several documents."""

    documents: list[str] = Field(..., description="Names of the analyzed documents")
    common_themes: list[str] = Field(default_factory=list)
    differences: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    confidence: float = Field(0, ge=0, le=100, description="Model confidence, 0-100")


class MeetingMinutes(BaseModel):
    """Minutes extracted from a meeting transcript."""

    summary: str = Field(..., description="Meeting summary")
    action_items: list[str] = Field(default_factory=list)
    decisions: list[str] = Field(default_factory=list)
    next_steps: list[str] = Field(default_factory=list)
