"""Chat context assembly configuration.

These settings control how uploaded files are packed into the system
message sent with a chat request. The whole context is bounded by an
estimated token budget that is shared evenly between the files shown.
"""

# =============================================================================
# Token Budget
# =============================================================================
# MAX_CONTEXT_TOKENS caps the estimated size of preamble + message + files.
# Tokens are estimated as ceil(characters / CHARS_PER_TOKEN), a rough
# approximation of a real tokenizer for English text and code.

MAX_CONTEXT_TOKENS = 12000
CHARS_PER_TOKEN = 4

# =============================================================================
# Per-File Floor
# =============================================================================
# Every file shown gets at least MIN_CHARS_PER_FILE characters, even when the
# budget is exhausted. With many files and a small budget the realized
# context can exceed MAX_CONTEXT_TOKENS by up to
# MIN_CHARS_PER_FILE / CHARS_PER_TOKEN tokens per file.

MIN_CHARS_PER_FILE = 500

# =============================================================================
# File Selection
# =============================================================================
# Corpora larger than MAX_FILES are reduced to the MAX_FILES best matches
# for the message. A message word found in the filename is worth
# FILENAME_MATCH_WEIGHT, one found in the content CONTENT_MATCH_WEIGHT.
# Source files get CODE_FILE_BOOST on top.

MAX_FILES = 20
FILENAME_MATCH_WEIGHT = 10
CONTENT_MATCH_WEIGHT = 1
CODE_FILE_BOOST = 5

# =============================================================================
# Truncation Markers
# =============================================================================
# Appended to a file block when its content had to be shortened.

KEY_DEFINITIONS_MARKER = "[Showing key definitions only]"
TRUNCATION_MARKER = "[Content truncated...]"
