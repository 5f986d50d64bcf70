"""LLM-backed assistant features: summaries, analysis, minutes, suggestions."""

from docscope.generation.assistant import AssistantError, AssistantService
from docscope.generation.schemas import (
    ChatMessage,
    CrossDocumentAnalysis,
    DocumentBrief,
    DocumentSummary,
    MeetingMinutes,
)

__all__ = [
    "AssistantError",
    "AssistantService",
    "ChatMessage",
    "CrossDocumentAnalysis",
    "DocumentBrief",
    "DocumentSummary",
    "MeetingMinutes",
]
