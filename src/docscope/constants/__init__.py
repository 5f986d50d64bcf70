"""Configuration constants.

Re-exports all config for convenient importing:
    from docscope.constants import MAX_CONTEXT_TOKENS, RELEVANCE_THRESHOLD
"""

from docscope.constants.search import *  # noqa: F403
from docscope.constants.context import *  # noqa: F403
from docscope.constants.files import *  # noqa: F403
from docscope.constants.llm import *  # noqa: F403
