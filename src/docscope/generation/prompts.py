# src/docscope/generation/prompts.py
"""Prompt templates for the assistant features."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from docscope.constants.llm import (
    ANALYSIS_CONTENT_CHARS,
    SUMMARY_CONTENT_CHARS,
    TRANSCRIPT_CHARS,
)
from docscope.constants.search import SNIPPET_LENGTH
from docscope.documents import Document
from docscope.generation.schemas import ChatMessage, DocumentBrief
from docscope.retrieval.engine import SearchResult


@dataclass
class PromptTemplate:
    """A template for generating prompts with variable substitution."""

    template: str

    def render(self, **kwargs: Any) -> str:
        """Render the template with the given variables.

        Raises:
            KeyError: If a required variable is missing.
        """
        return self.template.format(**kwargs)


# =============================================================================
# Document Summary
# =============================================================================

SUMMARY_TEMPLATE = PromptTemplate(
    template="""Analyze the following document and provide a comprehensive summary:

Document: {name}
Content: {content}

Please provide:
1. A concise title (if different from filename)
2. A 2-3 paragraph summary
3. 5-7 key points
4. Main topics/themes
5. Estimated word count

Format as JSON with keys: title, summary, keyPoints, topics, wordCount"""
)

# =============================================================================
# Cross-Document Analysis
# =============================================================================

ANALYSIS_TEMPLATE = PromptTemplate(
    template="""Analyze the following documents and identify patterns, themes, and differences:

{documents}

Please provide:
1. Common themes across all documents
2. Key differences between documents
3. Strategic recommendations based on the analysis
4. Confidence level (0-100) in the analysis

Format as JSON with keys: commonThemes, differences, recommendations, confidence"""
)

ANALYSIS_DOCUMENT_TEMPLATE = PromptTemplate(
    template="""Document {number}: {name}
Content: {content}"""
)

# =============================================================================
# Meeting Minutes
# =============================================================================

MINUTES_TEMPLATE = PromptTemplate(
    template="""Analyze this meeting transcript and extract:

Transcript: {transcript}

Please provide:
1. Meeting summary (2-3 paragraphs)
2. Action items with owners
3. Key decisions made
4. Next steps and follow-ups

Format as JSON with keys: summary, actionItems, decisions, nextSteps"""
)

# =============================================================================
# Suggestions
# =============================================================================

CONVERSATION_SUGGESTIONS_TEMPLATE = PromptTemplate(
    template="""Based on this recent conversation:
{conversation}

And these available documents:
{documents}

Generate 3-5 contextual suggestions for what the user might want to ask or discuss next.
Focus on:
1. Follow-up questions about the current topic
2. Related questions about the uploaded documents
3. Clarifications or deeper analysis
4. Practical next steps

Return as a JSON array of strings. Keep suggestions concise (under 60 characters each)."""
)

MESSAGE_SUGGESTIONS_TEMPLATE = PromptTemplate(
    template="""Based on the user's message: "{message}"

And these relevant documents:
{documents}

Suggest 3-5 helpful follow-up questions or actions the user might want to take.
Return as a JSON array of strings."""
)

NO_DOCUMENTS_TEXT = "No documents available"


def build_summary_prompt(document: Document, max_chars: int = SUMMARY_CONTENT_CHARS) -> str:
    return SUMMARY_TEMPLATE.render(name=document.name, content=document.content[:max_chars])


def build_analysis_prompt(
    documents: Sequence[Document], max_chars: int = ANALYSIS_CONTENT_CHARS
) -> str:
    """Render the analysis prompt, quoting max_chars of each document."""
    sections = [
        ANALYSIS_DOCUMENT_TEMPLATE.render(
            number=number, name=document.name, content=document.content[:max_chars]
        )
        for number, document in enumerate(documents, start=1)
    ]
    return ANALYSIS_TEMPLATE.render(documents="\n\n".join(sections))


def build_minutes_prompt(transcript: str, max_chars: int = TRANSCRIPT_CHARS) -> str:
    return MINUTES_TEMPLATE.render(transcript=transcript[:max_chars])


def build_conversation_suggestions_prompt(
    recent_messages: Sequence[ChatMessage],
    document_context: Sequence[DocumentBrief],
) -> str:
    conversation = "\n".join(f"{msg.sender}: {msg.content}" for msg in recent_messages)
    if document_context:
        documents = "\n".join(f"- {doc.name}: {doc.summary}" for doc in document_context)
    else:
        documents = NO_DOCUMENTS_TEXT
    return CONVERSATION_SUGGESTIONS_TEMPLATE.render(
        conversation=conversation, documents=documents
    )


def build_message_suggestions_prompt(
    message: str,
    results: Sequence[SearchResult],
    snippet_length: int = SNIPPET_LENGTH,
) -> str:
    """Render the suggestion prompt quoting the best chunk of each result.

    Args:
        message: The user's current message.
        results: Top search results for the message.
        snippet_length: Characters quoted from each result's best chunk.
    """
    lines = []
    for result in results:
        snippet = result.relevant_chunks[0].text[:snippet_length] if result.relevant_chunks else ""
        lines.append(f"- {result.document_name}: {snippet}...")
    return MESSAGE_SUGGESTIONS_TEMPLATE.render(message=message, documents="\n".join(lines))
