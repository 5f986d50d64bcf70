# src/docscope/llm/client.py
"""LiteLLM-based LLM client.

Only the assistant layer talks to this client. Search and context assembly
never import it, so they are unaffected by provider latency or outages.
"""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    AuthenticationError,
    RateLimitError,
)

from docscope.config import ConfigError, load_settings
from docscope.constants.llm import DEFAULT_TEMPERATURE, MAX_TOKENS

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMConnectionError(LLMError):
    """Raised when unable to connect to the LLM provider."""

    pass


class LLMAuthenticationError(LLMError):
    """Raised when authentication with the LLM provider fails."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limited by the LLM provider."""

    pass


# LiteLLM exception -> (our exception, message prefix). Any other failure
# is raised as a plain LLMError.
_ERROR_MAP: list[tuple[type[Exception], type[LLMError], str]] = [
    (AuthenticationError, LLMAuthenticationError, "Authentication failed"),
    (RateLimitError, LLMRateLimitError, "Rate limit exceeded"),
    (APIConnectionError, LLMConnectionError, "Connection failed"),
]


class LLMClient:
    """Unified LLM client supporting multiple providers via LiteLLM."""

    def __init__(
        self,
        provider: str,
        model: str,
        api_key: str | None = None,
        endpoint: str | None = None,
        log_path: Path | None = None,
    ):
        """Initialize LLM client.

        Args:
            provider: LLM provider (openai, anthropic, google, ollama).
            model: Model name.
            api_key: Optional API key (uses env var if not provided).
            endpoint: Optional custom endpoint (for Ollama).
            log_path: Optional path to JSONL log file for query logging.
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.endpoint = endpoint
        self.log_path = log_path

    def _log_query(
        self,
        system_prompt: str | None,
        prompt: str,
        temperature: float,
        max_tokens: int,
        response: str | None,
        duration_ms: int,
        error: str | None,
    ) -> None:
        """Append a query to the JSONL log file, if one is configured."""
        if not self.log_path:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "provider": self.provider,
            "model": self.model,
            "request": {
                "system_prompt": system_prompt,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens,
            },
            "response": response,
            "duration_ms": duration_ms,
            "error": error,
        }

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError as e:
            # A broken log file must not fail the request
            logger.warning(f"Could not write LLM query log {self.log_path}: {e}")

    def _get_model_string(self) -> str:
        """Get LiteLLM model string.

        Returns:
            Model string in provider/model format.
        """
        if self.provider == "openai":
            return self.model  # OpenAI is default
        elif self.provider == "ollama":
            return f"ollama/{self.model}"
        else:
            return f"{self.provider}/{self.model}"

    async def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate completion from prompt.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature.
            max_tokens: Maximum response tokens.

        Returns:
            Generated text response.

        Raises:
            LLMError: If the provider call fails.
        """
        if temperature is None or max_tokens is None:
            try:
                settings = load_settings()
                if temperature is None:
                    temperature = settings.llm.default_temperature
                if max_tokens is None:
                    max_tokens = settings.llm.max_tokens
            except (ConfigError, OSError):
                if temperature is None:
                    temperature = DEFAULT_TEMPERATURE
                if max_tokens is None:
                    max_tokens = MAX_TOKENS

        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self._get_model_string(),
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key

        if self.endpoint and self.provider == "ollama":
            kwargs["api_base"] = self.endpoint

        start_time = time.perf_counter()
        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            self._log_query(
                system_prompt,
                prompt,
                temperature,
                max_tokens,
                response=None,
                duration_ms=duration_ms,
                error=str(e),
            )
            for source, target, prefix in _ERROR_MAP:
                if isinstance(e, source):
                    raise target(f"{prefix}: {e}") from e
            raise LLMError(f"LLM API error: {e}") from e

        result: str = str(response.choices[0].message.content or "")
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log_query(
            system_prompt,
            prompt,
            temperature,
            max_tokens,
            response=result,
            duration_ms=duration_ms,
            error=None,
        )
        return result

    async def generate_with_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate completion expecting a JSON response.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature.
            max_tokens: Maximum response tokens.

        Returns:
            Generated text, which should hold JSON but is not validated.
        """
        full_system = (system_prompt or "") + "\n\nRespond with valid JSON only."
        return await self.generate(
            prompt,
            system_prompt=full_system.strip(),
            temperature=temperature,
            max_tokens=max_tokens,
        )
