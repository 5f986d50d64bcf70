"""Document records supplied by the external document store."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from docscope.constants.files import PDF_EXTENSION, SUPPORTED_EXTENSIONS


class DocumentValidationError(ValueError):
    """Raised when a document mapping is missing required fields."""

    pass


@dataclass(frozen=True)
class Document:
    """An uploaded document.

    Attributes:
        id: Identifier assigned by the document store.
        name: Filename, including its extension.
        content: Extracted text content.
        size_bytes: Original upload size, when known.
    """

    id: str
    name: str
    content: str
    size_bytes: int | None = None

    @property
    def extension(self) -> str:
        """Lowercase extension without the dot, or "" when there is none."""
        return file_extension(self.name)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Document":
        """Build a Document from a loosely-typed mapping.

        Accepts both ``size_bytes`` and the store's ``size`` key.

        Raises:
            DocumentValidationError: If a required field is missing or not a string.
        """
        for key in ("id", "name", "content"):
            if key not in data:
                raise DocumentValidationError(f"Document is missing required field {key!r}")
            if not isinstance(data[key], str):
                raise DocumentValidationError(
                    f"Document field {key!r} must be a string, got {type(data[key]).__name__}"
                )

        size = data.get("size_bytes", data.get("size"))
        if size is not None and (isinstance(size, bool) or not isinstance(size, int)):
            raise DocumentValidationError(f"Document size must be an integer, got {size!r}")

        return cls(id=data["id"], name=data["name"], content=data["content"], size_bytes=size)


def file_extension(name: str) -> str:
    """Return the lowercase extension of a filename, without the dot."""
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def is_supported_file(name: str, mime_type: str = "") -> bool:
    """Check whether an upload can be turned into a text document.

    Args:
        name: Uploaded filename.
        mime_type: MIME type reported by the upload, if any.

    Returns:
        True for PDFs, ``text/*`` uploads and known text/code extensions.
    """
    if mime_type == "application/pdf" or mime_type.startswith("text/"):
        return True
    extension = file_extension(name)
    return extension == PDF_EXTENSION or extension in SUPPORTED_EXTENSIONS
