"""Configuration tests.

Tests verify behavior (types, ranges, loading) not specific values.
"""

from pathlib import Path

import pytest

from docscope import constants
from docscope.config import (
    CONFIG_SCHEMA,
    Config,
    ConfigError,
    _load_config,
    load_settings,
)


def write_config(directory: Path, content: str) -> Path:
    """Write a config.ini file to the directory and return the path."""
    config_path = directory / "config.ini"
    config_path.write_text(content)
    return config_path


# =============================================================================
# Type Validation Tests
# =============================================================================


def test_all_settings_have_correct_types():
    """Every setting matches its declared type from schema."""
    config = _load_config(None)

    for section_name, keys in CONFIG_SCHEMA.items():
        section = getattr(config, section_name)
        for key, (expected_type, *_) in keys.items():
            value = getattr(section, key)
            assert isinstance(value, expected_type), (
                f"{section_name}.{key}: expected {expected_type.__name__}, "
                f"got {type(value).__name__}"
            )


def test_defaults_are_within_declared_ranges():
    """Every default satisfies its own min/max bounds."""
    for section_name, keys in CONFIG_SCHEMA.items():
        for key, (_, default, min_val, max_val, _) in keys.items():
            if min_val is not None:
                assert default >= min_val, f"{section_name}.{key} below minimum"
            if max_val is not None:
                assert default <= max_val, f"{section_name}.{key} above maximum"


def test_config_without_sections_uses_defaults():
    """A bare Config fills every section from the schema."""
    config = Config()

    assert config.search == _load_config(None).search
    assert config.context == _load_config(None).context
    assert config.llm == _load_config(None).llm


def test_schema_defaults_come_from_constants():
    """Each schema default is the documented constant of the same name."""
    for section_name, keys in CONFIG_SCHEMA.items():
        for key, (_, default, *_) in keys.items():
            assert default == getattr(constants, key.upper()), f"{section_name}.{key}"


def test_default_search_and_context_values():
    """Defaults match the documented search and context constants."""
    config = _load_config(None)

    assert config.search.chunk_size == 500
    assert config.search.relevance_threshold == 0.3
    assert config.search.max_chunks_per_document == 3
    assert config.context.max_context_tokens == 12000
    assert config.context.max_files == 20
    assert config.context.min_chars_per_file == 500


# =============================================================================
# File Loading Tests
# =============================================================================


def test_config_file_overrides_defaults(tmp_path: Path):
    """Values in the INI file replace schema defaults."""
    path = write_config(
        tmp_path,
        "[search]\nchunk_size = 250\n\n[context]\nmax_context_tokens = 4000\n",
    )

    config = _load_config(path)

    assert config.search.chunk_size == 250
    assert config.context.max_context_tokens == 4000
    assert config.context.max_files == 20


def test_missing_config_file_uses_defaults(tmp_path: Path):
    """A path that does not exist is ignored."""
    config = _load_config(tmp_path / "nope.ini")

    assert config.search.chunk_size == 500


def test_invalid_type_raises_config_error(tmp_path: Path):
    """Non-numeric values for numeric settings are rejected."""
    path = write_config(tmp_path, "[search]\nchunk_size = lots\n")

    with pytest.raises(ConfigError, match=r"\[search\]\.chunk_size"):
        _load_config(path)


def test_value_below_minimum_raises_config_error(tmp_path: Path):
    """Values under the schema minimum are rejected."""
    path = write_config(tmp_path, "[context]\nmax_files = 0\n")

    with pytest.raises(ConfigError, match="minimum"):
        _load_config(path)


def test_value_above_maximum_raises_config_error(tmp_path: Path):
    """Values over the schema maximum are rejected."""
    path = write_config(tmp_path, "[search]\nrelevance_threshold = 1.5\n")

    with pytest.raises(ConfigError, match="maximum"):
        _load_config(path)


# =============================================================================
# Environment Tests
# =============================================================================


def test_load_settings_reads_config_file_from_env(tmp_path: Path, monkeypatch):
    """DOCSCOPE_CONFIG points load_settings at an INI file."""
    path = write_config(tmp_path, "[llm]\nsuggestion_temperature = 0.9\n")
    monkeypatch.setenv("DOCSCOPE_CONFIG", str(path))

    settings = load_settings()

    assert settings.llm.suggestion_temperature == 0.9


def test_load_settings_defaults_to_ollama_without_keys():
    """With no API keys the local provider is used."""
    settings = load_settings()

    assert settings.llm_provider == "ollama"
    assert settings.llm_model == "llama3"
    assert settings.llm_endpoint == "http://localhost:11434"
    assert settings.llm_api_key is None


def test_load_settings_detects_provider_from_api_key(monkeypatch):
    """An API key selects its provider and default model."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

    settings = load_settings()

    assert settings.llm_provider == "anthropic"
    assert settings.llm_api_key == "sk-test"
    assert settings.llm_endpoint is None


def test_explicit_provider_and_model_win(monkeypatch):
    """ACTIVE_PROVIDER and ACTIVE_MODEL override detection."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.setenv("ACTIVE_PROVIDER", "google")
    monkeypatch.setenv("ACTIVE_MODEL", "gemini-pro")

    settings = load_settings()

    assert settings.llm_provider == "google"
    assert settings.llm_model == "gemini-pro"


def test_log_path_from_env(tmp_path: Path, monkeypatch):
    """DOCSCOPE_LOG_PATH enables query logging."""
    monkeypatch.setenv("DOCSCOPE_LOG_PATH", str(tmp_path / "llm.jsonl"))

    assert load_settings().llm_log_path == tmp_path / "llm.jsonl"


def test_load_settings_is_cached():
    """Repeated calls return the same object until the cache is cleared."""
    first = load_settings()

    assert load_settings() is first
    load_settings.cache_clear()
    assert load_settings() is not first
