"""Uploaded file classification.

These settings describe which uploaded files the assistant understands and
which of them are treated as source code when ranking files for context.
"""

# =============================================================================
# Supported Uploads
# =============================================================================
# Text-based formats accepted for upload, by lowercase extension (no dot).
# PDF files are accepted as well; their text is extracted upstream.

SUPPORTED_EXTENSIONS = frozenset(
    {
        "js", "jsx", "ts", "tsx", "py", "cs", "java", "cpp", "c", "h",
        "php", "rb", "go", "rs", "html", "htm", "css", "scss", "sass",
        "json", "xml", "yaml", "yml", "md", "txt", "sql", "sh", "bat",
        "ps1", "vb", "asp", "aspx", "razor",
    }
)
PDF_EXTENSION = "pdf"

# =============================================================================
# Source Code
# =============================================================================
# Files with these extensions get a ranking boost during file selection.

CODE_EXTENSIONS = frozenset({"py", "js", "ts", "cs"})
