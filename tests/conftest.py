"""Shared pytest fixtures for all tests.

Settings are cached process-wide, so every test starts from a clean
environment and an empty cache.
"""

import pytest

from docscope.api.deps import _reset_llm_instance, get_settings
from docscope.config import load_settings
from docscope.documents import Document

ENV_VARS = (
    "DOCSCOPE_CONFIG",
    "DOCSCOPE_LOG_PATH",
    "ACTIVE_PROVIDER",
    "ACTIVE_MODEL",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
    "OLLAMA_ENDPOINT",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate each test from the host environment and cached settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    load_settings.cache_clear()
    get_settings.cache_clear()
    _reset_llm_instance()
    yield
    load_settings.cache_clear()
    get_settings.cache_clear()
    _reset_llm_instance()


@pytest.fixture
def make_document():
    """Factory for documents with sequential ids."""
    counter = iter(range(1, 10_000))

    def _make(name: str, content: str, size_bytes: int | None = None) -> Document:
        return Document(
            id=f"doc-{next(counter)}", name=name, content=content, size_bytes=size_bytes
        )

    return _make
