"""
AI Providers Module - streaming clients for LLM providers.

Each provider has the same interface, making them interchangeable:
    async for chunk in provider.stream(prompt, model=endpoint):
        ...
"""

from pagen.ai.providers.base import (
    AIProvider,
    ProviderError,
    ProviderType,
    UnknownModelError,
)
from pagen.ai.providers.openai_provider import OpenAIProvider

__all__ = [
    "AIProvider",
    "ProviderError",
    "ProviderType",
    "UnknownModelError",
    "OpenAIProvider",
]
