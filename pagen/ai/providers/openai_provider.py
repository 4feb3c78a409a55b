"""
OpenAI Provider - streaming client for OpenAI-compatible chat endpoints.

Pagen talks to Volcano Ark by default, which exposes each deployed model
(DeepSeek V3, Seed 1.6, ...) behind an endpoint id on an OpenAI-compatible
API. Pointing LLM_BASE_URL at api.openai.com works the same way with plain
model names.

API Documentation: https://platform.openai.com/docs/api-reference/chat/create
"""

import logging
from typing import AsyncIterator, Optional

from openai import AsyncOpenAI, OpenAIError

from pagen.ai.providers.base import AIProvider, ProviderError, ProviderType

logger = logging.getLogger("pagen.ai.openai")


class OpenAIProvider(AIProvider):
    """
    OpenAI-compatible streaming provider.

    Usage:
        provider = OpenAIProvider(api_key="...", base_url="https://ark.cn-beijing.volces.com/api/v3")
        async for chunk in provider.stream("Describe Alice", model="ep-..."):
            ...
    """

    provider_type = ProviderType.OPENAI

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = 120,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize the provider.

        Args:
            api_key: Provider API key (empty = provider unavailable)
            base_url: OpenAI-compatible API root
            timeout: Request timeout in seconds
            client: Pre-built client (tests inject a mock here)
        """
        self.base_url = base_url

        if client is not None:
            self._client = client
        elif api_key:
            self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
            logger.info(f"OpenAI-compatible provider initialized for {base_url or 'api.openai.com'}")
        else:
            self._client = None
            logger.warning("LLM API key not configured - provider unavailable")

    async def stream(
        self,
        prompt: str,
        model: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
    ) -> AsyncIterator[str]:
        if not self._client:
            raise ProviderError("LLM API key not configured")

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
                stream=True,
            )

            async for chunk in response:
                # The final chunk of some providers carries only usage
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content

        except OpenAIError as e:
            logger.error(f"OpenAI stream failed for {model}: {e}")
            raise ProviderError(str(e)) from e
