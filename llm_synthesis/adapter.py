"""LLM adapters for the dataset assistant.

Provides a base interface, an adapter for OpenAI-compatible chat APIs and
a deterministic mock for tests and offline runs.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Optional

from app.config import AssistantSettings


class LLMAdapterError(RuntimeError):
    """Raised when the language model cannot produce an answer."""


class BaseLLMAdapter(ABC):
    """Abstract base for all LLM adapters."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a prompt to the LLM and return the raw response text.

        Args:
            prompt: The fully formatted prompt string.

        Returns:
            Free-text answer from the model.
        """


class OpenAILLMAdapter(BaseLLMAdapter):
    """Adapter for OpenAI-compatible chat completion APIs."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        max_tokens: int = 2048,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """Initialise the OpenAI adapter.

        Args:
            model: Model identifier.
            max_tokens: Maximum tokens in the completion.
            api_key: API key; the OpenAI client falls back to OPENAI_API_KEY.
            base_url: Optional base URL for OpenAI-compatible endpoints.
        """
        try:
            from openai import OpenAI  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError(
                "openai package is required for OpenAILLMAdapter. "
                "Install it with: pip install openai"
            ) from exc

        client_kwargs: dict = {}
        if api_key:
            client_kwargs["api_key"] = api_key
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = OpenAI(**client_kwargs)
        self._model = model
        self._max_tokens = max_tokens

    def generate(self, prompt: str) -> str:
        """Call the chat completion API and return the message content.

        Raises:
            LLMAdapterError: On any transport or API failure.
        """
        from openai import OpenAIError  # type: ignore[import-untyped]

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.2,
                max_tokens=self._max_tokens,
                stream=False,
            )
        except OpenAIError as exc:
            raise LLMAdapterError("Language model request failed.") from exc
        return response.choices[0].message.content or ""


class MockLLMAdapter(BaseLLMAdapter):
    """Deterministic adapter for tests and CI.

    The answer embeds a short digest of the prompt so callers can tell
    different prompts apart without a real model.
    """

    def __init__(self) -> None:
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        digest = hashlib.sha256(prompt.encode("utf-8")).hexdigest()[:12]
        return f"Mock answer (prompt {digest})."


def build_adapter(settings: AssistantSettings) -> BaseLLMAdapter:
    """Instantiate the adapter selected by ``settings.adapter``.

    mock   -> MockLLMAdapter  (testing, no API key required)
    openai -> OpenAILLMAdapter (default)
    """
    if settings.adapter == "mock":
        return MockLLMAdapter()

    return OpenAILLMAdapter(
        model=settings.model,
        max_tokens=settings.max_tokens,
        api_key=settings.api_key,
        base_url=settings.base_url,
    )
