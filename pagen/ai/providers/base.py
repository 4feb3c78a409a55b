"""
Base AI Provider - Abstract interface for streaming LLM providers.

Every provider turns (prompt, endpoint) into an ordered, lazy sequence of
text chunks. The gateway only depends on this interface, so tests swap in
a scripted provider and production uses the OpenAI-compatible client.

Example:
    provider = OpenAIProvider(api_key=..., base_url=...)
    async for chunk in provider.stream("Hello", model="ep-..."):
        print(chunk, end="")
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import AsyncIterator, Optional

logger = logging.getLogger("pagen.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    OPENAI = "openai"


# ---------------------------------------------------------------------------
# EXCEPTIONS
# ---------------------------------------------------------------------------


class ProviderError(Exception):
    """Raised when a provider cannot produce (or finish) a response."""
    pass


class UnknownModelError(ProviderError):
    """Raised when a short model name has no configured endpoint."""

    def __init__(self, model: str):
        super().__init__(f"Unknown model: {model}")
        self.model = model


class AIProvider(ABC):
    """
    Abstract base class for streaming AI providers.

    Unlike request/response providers, stream() raises on failure: a
    half-delivered page must abort the HTTP response instead of being
    reported as a successful, shorter answer.
    """

    provider_type: ProviderType

    @abstractmethod
    def stream(
        self,
        prompt: str,
        model: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
    ) -> AsyncIterator[str]:
        """
        Stream the model's answer as text chunks.

        Args:
            prompt: The user message
            model: Provider-specific model or endpoint id
            system_prompt: Optional system instructions
            temperature: Creativity (0=deterministic, 1=creative)

        Returns:
            Async iterator of non-empty text chunks, in order

        Raises:
            ProviderError: If the provider is unusable or fails mid-stream
        """
        raise NotImplementedError
