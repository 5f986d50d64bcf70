"""LLM client configuration.

Default parameters for the assistant's LLM calls (summaries, analysis,
suggestions). These can be overridden per-call but provide sensible
defaults for most use cases.
"""

# =============================================================================
# Generation Defaults
# =============================================================================
# MAX_TOKENS caps response length to control costs and ensure responses complete.
# DEFAULT_TEMPERATURE is low because most assistant output is structured JSON.
# SUGGESTION_TEMPERATURE is higher so follow-up questions vary.

MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.3
SUGGESTION_TEMPERATURE = 0.4

# =============================================================================
# Prompt Content Limits
# =============================================================================
# Characters of source text quoted into each prompt. Analysis prompts quote
# several documents, so each gets a smaller share.

SUMMARY_CONTENT_CHARS = 8000
ANALYSIS_CONTENT_CHARS = 3000
TRANSCRIPT_CHARS = 6000

# =============================================================================
# Suggestion Limits
# =============================================================================
# At most MAX_SUGGESTIONS suggestions are returned. When the model ignores
# the JSON format, lines of MAX_SUGGESTION_LINE_LENGTH characters or more are
# not treated as suggestions.

MAX_SUGGESTIONS = 5
MAX_SUGGESTION_LINE_LENGTH = 100
