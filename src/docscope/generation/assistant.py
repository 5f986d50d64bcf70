# src/docscope/generation/assistant.py
"""Assistant features backed by an external LLM.

Summaries, cross-document analysis, meeting minutes and follow-up
suggestions. Prompt building and response parsing are pure; only the
generation calls go to the LLM client. Summaries, analysis and minutes
ask for JSON through ``generate_with_json``.
"""

import logging
from collections.abc import Sequence

from docscope.config import Config, load_settings
from docscope.documents import Document
from docscope.generation.parsing import (
    parse_analysis,
    parse_minutes,
    parse_suggestions,
    parse_summary,
)
from docscope.generation.prompts import (
    build_analysis_prompt,
    build_conversation_suggestions_prompt,
    build_message_suggestions_prompt,
    build_minutes_prompt,
    build_summary_prompt,
)
from docscope.generation.schemas import (
    ChatMessage,
    CrossDocumentAnalysis,
    DocumentBrief,
    DocumentSummary,
    MeetingMinutes,
)
from docscope.llm.client import LLMClient, LLMError
from docscope.retrieval.engine import SearchFailure, search_async

logger = logging.getLogger(__name__)

# Temperatures and output caps per feature, as (temperature, max_tokens)
SUMMARY_PARAMS = (0.3, 1000)
ANALYSIS_PARAMS = (0.2, 1500)
MINUTES_PARAMS = (0.2, 1200)
CONVERSATION_SUGGESTION_PARAMS = (0.6, 400)
MESSAGE_SUGGESTION_MAX_TOKENS = 300


class AssistantError(Exception):
    """Raised when an assistant feature cannot produce a result."""

    pass


class AssistantService:
    """LLM-backed helpers over uploaded documents."""

    def __init__(self, llm: LLMClient, settings: Config | None = None) -> None:
        """Initialize assistant service.

        Args:
            llm: Client used for every generation call.
            settings: Application settings; loaded when None.
        """
        self._llm = llm
        self._settings = settings or load_settings()

    async def summarize_document(self, document: Document) -> DocumentSummary:
        """Summarize a single document.

        Raises:
            AssistantError: If the LLM call fails.
        """
        prompt = build_summary_prompt(document, self._settings.llm.summary_content_chars)
        temperature, max_tokens = SUMMARY_PARAMS
        try:
            response = await self._llm.generate_with_json(
                prompt, temperature=temperature, max_tokens=max_tokens
            )
        except LLMError as e:
            logger.error(f"Error generating summary for {document.name}: {e}")
            raise AssistantError("Failed to generate document summary") from e
        return parse_summary(response, document)

    async def analyze_documents(self, documents: Sequence[Document]) -> CrossDocumentAnalysis:
        """Compare several documents.

        Raises:
            AssistantError: If the LLM call fails.
        """
        prompt = build_analysis_prompt(documents, self._settings.llm.analysis_content_chars)
        temperature, max_tokens = ANALYSIS_PARAMS
        try:
            response = await self._llm.generate_with_json(
                prompt, temperature=temperature, max_tokens=max_tokens
            )
        except LLMError as e:
            logger.error(f"Error performing cross-document analysis: {e}")
            raise AssistantError("Failed to perform cross-document analysis") from e
        return parse_analysis(response, documents)

    async def generate_meeting_minutes(self, transcript: str) -> MeetingMinutes:
        """Extract minutes from a meeting transcript.

        Raises:
            AssistantError: If the LLM call fails.
        """
        prompt = build_minutes_prompt(transcript, self._settings.llm.transcript_chars)
        temperature, max_tokens = MINUTES_PARAMS
        try:
            response = await self._llm.generate_with_json(
                prompt, temperature=temperature, max_tokens=max_tokens
            )
        except LLMError as e:
            logger.error(f"Error generating meeting minutes: {e}")
            raise AssistantError("Failed to generate meeting minutes") from e
        return parse_minutes(response)

    async def suggest_from_conversation(
        self,
        recent_messages: Sequence[ChatMessage],
        document_context: Sequence[DocumentBrief],
    ) -> list[str]:
        """Suggest what to ask next given the recent conversation.

        Returns:
            Up to five suggestions; empty if the LLM call fails.
        """
        prompt = build_conversation_suggestions_prompt(recent_messages, document_context)
        temperature, max_tokens = CONVERSATION_SUGGESTION_PARAMS
        try:
            response = await self._llm.generate(
                prompt, temperature=temperature, max_tokens=max_tokens
            )
        except LLMError as e:
            logger.error(f"Error generating contextual suggestions: {e}")
            return []
        return parse_suggestions(response)

    async def suggest_for_message(self, message: str, documents: Sequence[Document]) -> list[str]:
        """Suggest follow-ups for a message, grounded in matching documents.

        The LLM is only called when the search finds at least one document.

        Returns:
            Up to five suggestions; empty on search or LLM failure.
        """
        search_settings = self._settings.search
        try:
            results = await search_async(
                message,
                documents,
                chunk_size=search_settings.chunk_size,
                threshold=search_settings.relevance_threshold,
                max_chunks=search_settings.max_chunks_per_document,
                parallel_limit=search_settings.parallel_limit,
            )
        except SearchFailure as e:
            logger.error(f"Error getting contextual suggestions: {e}")
            return []

        top_results = results[: search_settings.suggestion_documents]
        if not top_results:
            return []

        prompt = build_message_suggestions_prompt(
            message, top_results, search_settings.snippet_length
        )
        try:
            response = await self._llm.generate(
                prompt,
                temperature=self._settings.llm.suggestion_temperature,
                max_tokens=MESSAGE_SUGGESTION_MAX_TOKENS,
            )
        except LLMError as e:
            logger.error(f"Error getting contextual suggestions: {e}")
            return []
        return parse_suggestions(response, strip_bullets=False)
