"""
Model Gateway - the single entry point for page generation calls.

Callers pick a short model name ("deepseek-v3", "seed1.6"); the gateway maps
it to the provider endpoint configured in Settings.MODEL_ENDPOINTS and asks
the provider for a stream of chunks.

    chunks = gateway.generate("deepseek-v3", prompt)   # raises UnknownModelError here
    async for chunk in chunks:                        # nothing is requested until here
        ...
"""

import logging
from typing import AsyncIterator, Dict, List, Optional

from pagen.ai.prompts import WEBPAGE_SYSTEM_PROMPT
from pagen.ai.providers.base import AIProvider, UnknownModelError

logger = logging.getLogger("pagen.ai.gateway")


class ModelGateway:
    """
    Resolves model names and starts streaming generations.

    Attributes:
        provider: The provider every model is served by
        endpoints: Model name -> provider endpoint id
        default_model: Model used when a page doesn't name one
    """

    def __init__(
        self,
        provider: AIProvider,
        endpoints: Dict[str, str],
        default_model: str,
        system_prompt: str = WEBPAGE_SYSTEM_PROMPT,
        temperature: float = 0.4,
    ):
        self.provider = provider
        self.endpoints = dict(endpoints)
        self.default_model = default_model
        self.system_prompt = system_prompt
        self.temperature = temperature

        if default_model not in self.endpoints:
            logger.warning(f"Default model {default_model!r} has no configured endpoint")

    @property
    def model_list(self) -> List[str]:
        return list(self.endpoints)

    def resolve(self, model: Optional[str]) -> str:
        """
        Map a short model name to its provider endpoint.

        Raises:
            UnknownModelError: If the name isn't configured
        """
        name = model or self.default_model
        endpoint = self.endpoints.get(name)
        if not endpoint:
            raise UnknownModelError(name)
        return endpoint

    def generate(self, model: Optional[str], prompt: str) -> AsyncIterator[str]:
        """
        Start a generation and return its lazy chunk stream.

        Resolution happens before the stream is returned, so an unknown
        model fails before any chunk exists.
        """
        endpoint = self.resolve(model)
        logger.info(f"Generating with {model or self.default_model} ({endpoint})")

        return self.provider.stream(
            prompt=prompt,
            model=endpoint,
            system_prompt=self.system_prompt,
            temperature=self.temperature,
        )
