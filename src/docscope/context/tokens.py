"""Token estimation for context budgeting."""

import math

from docscope.constants.context import CHARS_PER_TOKEN


def estimate_tokens(text: str, chars_per_token: int = CHARS_PER_TOKEN) -> int:
    """Estimate token count for text.

    Uses ceil(characters / 4), a rough stand-in for a real tokenizer that
    is good enough to keep prompts under a model's input limit. Swap this
    function for a tokenizer-backed count if tighter budgets are needed.

    Args:
        text: Text to estimate tokens for.
        chars_per_token: Characters assumed per token.

    Returns:
        Estimated token count; 0 for empty text.
    """
    return math.ceil(len(text) / chars_per_token)
