# src/docscope/config.py
"""Configuration system for docscope.

This module handles loading settings from environment variables and an
optional INI file, providing defaults for every tunable of the search,
context assembly and assistant layers.
"""

from configparser import ConfigParser
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
import os

from docscope.constants.context import (
    CHARS_PER_TOKEN,
    CODE_FILE_BOOST,
    CONTENT_MATCH_WEIGHT,
    FILENAME_MATCH_WEIGHT,
    MAX_CONTEXT_TOKENS,
    MAX_FILES,
    MIN_CHARS_PER_FILE,
)
from docscope.constants.llm import (
    ANALYSIS_CONTENT_CHARS,
    DEFAULT_TEMPERATURE,
    MAX_TOKENS,
    SUGGESTION_TEMPERATURE,
    SUMMARY_CONTENT_CHARS,
    TRANSCRIPT_CHARS,
)
from docscope.constants.search import (
    CHUNK_SIZE,
    MAX_CHUNKS_PER_DOCUMENT,
    PARALLEL_LIMIT,
    RELEVANCE_THRESHOLD,
    SNIPPET_LENGTH,
    SUGGESTION_DOCUMENTS,
)


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# Schema: section -> key -> (type, default, min, max, description)
CONFIG_SCHEMA: dict[str, dict[str, tuple[type, Any, Any, Any, str]]] = {
    "search": {
        "chunk_size": (int, CHUNK_SIZE, 1, 100_000, "Characters per search chunk"),
        "relevance_threshold": (
            float,
            RELEVANCE_THRESHOLD,
            0.0,
            1.0,
            "Minimum chunk score (exclusive)",
        ),
        "max_chunks_per_document": (
            int,
            MAX_CHUNKS_PER_DOCUMENT,
            1,
            50,
            "Chunks returned per document",
        ),
        "parallel_limit": (int, PARALLEL_LIMIT, 1, 64, "Documents scored concurrently"),
        "suggestion_documents": (
            int,
            SUGGESTION_DOCUMENTS,
            1,
            20,
            "Search results quoted in suggestions",
        ),
        "snippet_length": (
            int,
            SNIPPET_LENGTH,
            20,
            2000,
            "Characters quoted per suggestion result",
        ),
    },
    "context": {
        "max_context_tokens": (int, MAX_CONTEXT_TOKENS, 100, 1_000_000, "Total context budget"),
        "max_files": (int, MAX_FILES, 1, 1000, "Files shown before selection kicks in"),
        "min_chars_per_file": (int, MIN_CHARS_PER_FILE, 0, 100_000, "Per-file character floor"),
        "chars_per_token": (int, CHARS_PER_TOKEN, 1, 16, "Characters per estimated token"),
        "filename_match_weight": (
            int,
            FILENAME_MATCH_WEIGHT,
            0,
            1000,
            "Score for a word in the filename",
        ),
        "content_match_weight": (
            int,
            CONTENT_MATCH_WEIGHT,
            0,
            1000,
            "Score for a word in the content",
        ),
        "code_file_boost": (int, CODE_FILE_BOOST, 0, 1000, "Score boost for source files"),
    },
    "llm": {
        "max_tokens": (int, MAX_TOKENS, 64, 32768, "Max response tokens"),
        "default_temperature": (float, DEFAULT_TEMPERATURE, 0.0, 2.0, "Default LLM temperature"),
        "suggestion_temperature": (
            float,
            SUGGESTION_TEMPERATURE,
            0.0,
            2.0,
            "Temperature for suggestions",
        ),
        "summary_content_chars": (
            int,
            SUMMARY_CONTENT_CHARS,
            100,
            200_000,
            "Document chars in summaries",
        ),
        "analysis_content_chars": (
            int,
            ANALYSIS_CONTENT_CHARS,
            100,
            200_000,
            "Chars per document in analysis",
        ),
        "transcript_chars": (int, TRANSCRIPT_CHARS, 100, 200_000, "Transcript chars in minutes"),
    },
}


@dataclass(frozen=True)
class SearchConfig:
    """Semantic search configuration."""

    chunk_size: int
    relevance_threshold: float
    max_chunks_per_document: int
    parallel_limit: int
    suggestion_documents: int
    snippet_length: int


@dataclass(frozen=True)
class ContextConfig:
    """Chat context assembly configuration."""

    max_context_tokens: int
    max_files: int
    min_chars_per_file: int
    chars_per_token: int
    filename_match_weight: int
    content_match_weight: int
    code_file_boost: int


@dataclass(frozen=True)
class LLMConfig:
    """LLM client configuration."""

    max_tokens: int
    default_temperature: float
    suggestion_temperature: float
    summary_content_chars: int
    analysis_content_chars: int
    transcript_chars: int


def _load_section(
    parser: ConfigParser, section: str, schema: dict[str, tuple[type, Any, Any, Any, str]]
) -> dict[str, Any]:
    """Load and validate a configuration section.

    Args:
        parser: ConfigParser instance with loaded config
        section: Section name to load
        schema: Schema definition for the section

    Returns:
        Dictionary of validated configuration values

    Raises:
        ConfigError: If validation fails
    """
    result = {}

    for key, (typ, default, min_val, max_val, _) in schema.items():
        if parser.has_option(section, key):
            raw_value = parser.get(section, key)
            value: bool | int | float | str
            try:
                if typ is bool:
                    value = raw_value.lower() in ("true", "1", "yes", "on")
                elif typ is int:
                    value = int(raw_value)
                elif typ is float:
                    value = float(raw_value)
                else:
                    value = raw_value
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for [{section}].{key}: {raw_value!r} (expected {typ.__name__})"
                ) from e
        else:
            value = default

        if typ in (int, float) and value is not None:
            if min_val is not None and value < min_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but minimum is {min_val}"
                )
            if max_val is not None and value > max_val:
                raise ConfigError(
                    f"Value for [{section}].{key} is {value}, but maximum is {max_val}"
                )

        result[key] = value

    return result


def _defaults(section: str) -> dict[str, Any]:
    return {key: default for key, (_, default, _, _, _) in CONFIG_SCHEMA[section].items()}


def _load_config(config_path: Optional[Path] = None) -> "Config":
    """Load configuration sections from an INI file (internal use only).

    Args:
        config_path: Path to config file. If None, uses defaults from schema.

    Returns:
        Config object with all sections populated and default provider fields.

    Raises:
        ConfigError: If validation fails
    """
    parser = ConfigParser()

    if config_path and config_path.exists():
        parser.read(config_path)

    search = SearchConfig(**_load_section(parser, "search", CONFIG_SCHEMA["search"]))
    context = ContextConfig(**_load_section(parser, "context", CONFIG_SCHEMA["context"]))
    llm = LLMConfig(**_load_section(parser, "llm", CONFIG_SCHEMA["llm"]))

    return Config(search=search, context=context, llm=llm)


@dataclass(frozen=True)
class Config:
    """Complete application configuration."""

    active_provider: str = "ollama"
    active_model: str = "llama3"
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    ollama_endpoint: str = "http://localhost:11434"
    llm_log_path: Optional[Path] = None

    # Section configs - defaults set in __post_init__
    search: SearchConfig = None  # type: ignore[assignment]
    context: ContextConfig = None  # type: ignore[assignment]
    llm: LLMConfig = None  # type: ignore[assignment]

    def __post_init__(self):
        """Initialize section configs with defaults if not provided."""
        # Since frozen=True, we need to use object.__setattr__
        if self.search is None:
            object.__setattr__(self, "search", SearchConfig(**_defaults("search")))
        if self.context is None:
            object.__setattr__(self, "context", ContextConfig(**_defaults("context")))
        if self.llm is None:
            object.__setattr__(self, "llm", LLMConfig(**_defaults("llm")))

    @property
    def llm_provider(self) -> str:
        """LLM provider name."""
        return self.active_provider

    @property
    def llm_model(self) -> str:
        """LLM model name."""
        return self.active_model

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key for the active LLM provider."""
        provider_keys = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "google": self.google_api_key,
        }
        return provider_keys.get(self.active_provider)

    @property
    def llm_endpoint(self) -> Optional[str]:
        """Endpoint for LLM provider (mainly for Ollama)."""
        if self.active_provider == "ollama":
            return self.ollama_endpoint
        return None


PROVIDER_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-haiku-20241022",
    "google": "gemini-1.5-flash",
    "ollama": "llama3",
}


def _detect_provider_from_keys() -> tuple[str, str]:
    """Auto-detect provider from available API keys.

    Returns:
        Tuple of (provider, model) based on available keys.
        Falls back to ollama if no keys are found.
    """
    for provider, env_var in (
        ("openai", "OPENAI_API_KEY"),
        ("anthropic", "ANTHROPIC_API_KEY"),
        ("google", "GOOGLE_API_KEY"),
    ):
        if os.getenv(env_var):
            return (provider, PROVIDER_DEFAULT_MODELS[provider])
    return ("ollama", PROVIDER_DEFAULT_MODELS["ollama"])


@lru_cache(maxsize=1)
def load_settings() -> Config:
    """Load settings from environment variables and config file.

    Settings are cached for the lifetime of the application.
    Use load_settings.cache_clear() to reload settings.

    Returns:
        Config object populated from environment variables and config file.

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    config_path_str = os.getenv("DOCSCOPE_CONFIG")
    config_file = Path(config_path_str) if config_path_str else None
    try:
        config_exists = config_file is not None and config_file.exists()
    except PermissionError:
        config_exists = False
    base_config = _load_config(config_file if config_exists else None)

    active_provider = os.getenv("ACTIVE_PROVIDER")
    active_model = os.getenv("ACTIVE_MODEL")

    if not active_provider:
        detected_provider, detected_model = _detect_provider_from_keys()
        active_provider = detected_provider
        if not active_model:
            active_model = detected_model
    elif not active_model:
        active_model = PROVIDER_DEFAULT_MODELS.get(active_provider, "llama3")

    log_path_str = os.getenv("DOCSCOPE_LOG_PATH")

    return Config(
        active_provider=active_provider,
        active_model=active_model,
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        google_api_key=os.getenv("GOOGLE_API_KEY"),
        ollama_endpoint=os.getenv("OLLAMA_ENDPOINT", "http://localhost:11434"),
        llm_log_path=Path(log_path_str) if log_path_str else None,
        search=base_config.search,
        context=base_config.context,
        llm=base_config.llm,
    )
