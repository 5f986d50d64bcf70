"""FastAPI dependency injection functions."""

from functools import lru_cache

from fastapi import Depends

from docscope.config import Config, load_settings
from docscope.generation.assistant import AssistantService
from docscope.llm.client import LLMClient


@lru_cache(maxsize=1)
def get_settings() -> Config:
    """Get cached application settings."""
    return load_settings()


_llm_instance: LLMClient | None = None


def get_llm() -> LLMClient:
    """Get LLM client instance."""
    global _llm_instance
    if _llm_instance is None:
        settings = get_settings()
        _llm_instance = LLMClient(
            provider=settings.llm_provider,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            endpoint=settings.llm_endpoint,
            log_path=settings.llm_log_path,
        )
    return _llm_instance


def _reset_llm_instance() -> None:
    """Reset LLM client instance (for testing only)."""
    global _llm_instance
    _llm_instance = None


def get_assistant(
    llm: LLMClient = Depends(get_llm),
    settings: Config = Depends(get_settings),
) -> AssistantService:
    """Get an assistant service bound to the shared LLM client."""
    return AssistantService(llm, settings)
