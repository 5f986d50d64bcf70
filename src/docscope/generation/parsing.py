"""Parsing of LLM responses into assistant schemas.

Models do not always honour a JSON instruction. Every parser here falls
back to a usable result built from the raw text instead of failing.
"""

import json
import logging
import re
from collections.abc import Sequence
from typing import Any

from docscope.constants.llm import MAX_SUGGESTION_LINE_LENGTH, MAX_SUGGESTIONS
from docscope.documents import Document
from docscope.generation.schemas import (
    CrossDocumentAnalysis,
    DocumentSummary,
    MeetingMinutes,
)

logger = logging.getLogger(__name__)

# Matches a whole response wrapped in a ```json fence
JSON_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*\n(.*?)\n?```$", re.DOTALL)
BULLET_PATTERN = re.compile(r"^[-*•]\s*")

ANALYSIS_FALLBACK_CONFIDENCE = 75


def parse_json_response(response: str) -> Any | None:
    """Parse a JSON response, tolerating a surrounding code fence.

    Returns:
        The decoded value, or None if the response is not JSON.
    """
    text = response.strip()
    match = JSON_FENCE_PATTERN.match(text)
    if match:
        text = match.group(1).strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def _ensure_list(value: Any) -> list[str]:
    return [str(item) for item in value] if isinstance(value, list) else []


def _as_number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return value


def parse_summary(response: str, document: Document) -> DocumentSummary:
    """Build a DocumentSummary from a summary response.

    Falls back to the raw response as the summary, with the word count
    taken from the document itself.
    """
    data = parse_json_response(response)
    if not isinstance(data, dict):
        logger.warning(f"Summary for {document.name} is not JSON, using raw response")
        return DocumentSummary(
            id=document.id,
            title=document.name,
            summary=response,
            word_count=len(document.content.split(" ")),
        )

    return DocumentSummary(
        id=document.id,
        title=data.get("title") or document.name,
        summary=data.get("summary") or "Summary not available",
        key_points=_ensure_list(data.get("keyPoints")),
        topics=_ensure_list(data.get("topics")),
        word_count=int(_as_number(data.get("wordCount"))),
    )


def parse_analysis(response: str, documents: Sequence[Document]) -> CrossDocumentAnalysis:
    """Build a CrossDocumentAnalysis from an analysis response."""
    names = [document.name for document in documents]
    data = parse_json_response(response)
    if not isinstance(data, dict):
        logger.warning("Cross-document analysis is not JSON, using raw response")
        return CrossDocumentAnalysis(
            documents=names,
            common_themes=["Analysis completed"],
            differences=["See detailed response"],
            recommendations=[response],
            confidence=ANALYSIS_FALLBACK_CONFIDENCE,
        )

    confidence = min(100, max(0, _as_number(data.get("confidence"))))
    return CrossDocumentAnalysis(
        documents=names,
        common_themes=_ensure_list(data.get("commonThemes")),
        differences=_ensure_list(data.get("differences")),
        recommendations=_ensure_list(data.get("recommendations")),
        confidence=confidence,
    )


def parse_minutes(response: str) -> MeetingMinutes:
    data = parse_json_response(response)
    if not isinstance(data, dict):
        logger.warning("Meeting minutes are not JSON, using raw response")
        return MeetingMinutes(summary=response)

    return MeetingMinutes(
        summary=str(data.get("summary") or ""),
        action_items=_ensure_list(data.get("actionItems")),
        decisions=_ensure_list(data.get("decisions")),
        next_steps=_ensure_list(data.get("nextSteps")),
    )


def parse_suggestions(response: str, strip_bullets: bool = True) -> list[str]:
    """Extract up to MAX_SUGGESTIONS suggestions from a response.

    A JSON array is used as-is. Any other response is split into lines;
    with strip_bullets, leading list markers are removed and overly long
    lines are dropped.

    Args:
        response: Raw LLM response.
        strip_bullets: Clean up bulleted text responses.

    Returns:
        At most MAX_SUGGESTIONS suggestions.
    """
    data = parse_json_response(response)
    if isinstance(data, list):
        return [str(item) for item in data][:MAX_SUGGESTIONS]
    if data is not None:
        logger.warning(f"Suggestions response is JSON but not a list: {type(data).__name__}")
        return []

    lines = [line.strip() for line in response.split("\n") if line.strip()]
    if strip_bullets:
        lines = [BULLET_PATTERN.sub("", line).strip() for line in lines]
        lines = [line for line in lines if 0 < len(line) < MAX_SUGGESTION_LINE_LENGTH]
    return lines[:MAX_SUGGESTIONS]
