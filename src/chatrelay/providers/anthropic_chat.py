"""
Anthropic Chat Provider — Claude via the Messages API.

Streaming uses the SDK's messages.stream() helper and relays its text_stream.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

import anthropic
from anthropic import AsyncAnthropic

import chatrelay.core.config as config_module
from chatrelay.core.config import ProviderConfig
from chatrelay.providers.base import ChatProvider, ProviderError

logger = logging.getLogger(__name__)


class AnthropicChatProvider(ChatProvider):
    name = "anthropic"

    def __init__(self, settings: ProviderConfig | None = None):
        self.settings = settings or config_module.config.provider
        self.client: AsyncAnthropic | None = None

    async def start(self) -> None:
        if self.client:
            return

        client_kwargs: dict = {"timeout": self.settings.timeout}
        if self.settings.anthropic_api_key:
            client_kwargs["api_key"] = self.settings.anthropic_api_key

        try:
            self.client = AsyncAnthropic(**client_kwargs)
        except anthropic.AnthropicError as e:
            raise ProviderError(self.name, str(e)) from e

        logger.info(f"Anthropic chat ready (model={self.settings.anthropic_model})")

    async def stop(self) -> None:
        if self.client:
            await self.client.close()
        self.client = None

    def _params(self, prompt: str) -> dict:
        return {
            "model": self.settings.anthropic_model,
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def complete(self, prompt: str) -> str | None:
        if not self.client:
            raise ProviderError(self.name, "provider not started")

        try:
            message = await self.client.messages.create(**self._params(prompt))
        except anthropic.AnthropicError as e:
            raise ProviderError(self.name, str(e)) from e

        # Extract text from the response content blocks
        texts = [block.text for block in message.content if block.type == "text"]
        if not texts:
            return None
        return "".join(texts)

    async def stream(self, prompt: str) -> AsyncIterator[str | None]:
        if not self.client:
            raise ProviderError(self.name, "provider not started")

        try:
            async with self.client.messages.stream(**self._params(prompt)) as stream:
                async for text in stream.text_stream:
                    yield text
        except anthropic.AnthropicError as e:
            raise ProviderError(self.name, str(e)) from e

    async def health_check(self) -> dict:
        return {
            "provider": self.name,
            "model": self.settings.anthropic_model,
            "status": "ready" if self.client else "stopped",
        }
