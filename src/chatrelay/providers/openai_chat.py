"""
OpenAI Chat Provider — Chat Completions, single-shot and streaming.

Supports OpenAI-compatible APIs via CHATRELAY_OPENAI_BASE_URL.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator

import openai
from openai import AsyncOpenAI

import chatrelay.core.config as config_module
from chatrelay.core.config import ProviderConfig
from chatrelay.providers.base import ChatProvider, ProviderError

logger = logging.getLogger(__name__)


class OpenAIChatProvider(ChatProvider):
    name = "openai"

    def __init__(self, settings: ProviderConfig | None = None):
        self.settings = settings or config_module.config.provider
        self.client: AsyncOpenAI | None = None

    async def start(self) -> None:
        if self.client:
            return  # Already started

        client_kwargs: dict = {"timeout": self.settings.timeout}
        if self.settings.openai_api_key:
            client_kwargs["api_key"] = self.settings.openai_api_key
        if self.settings.openai_base_url:
            client_kwargs["base_url"] = self.settings.openai_base_url
            logger.info(f"Using custom base_url: {self.settings.openai_base_url}")

        try:
            self.client = AsyncOpenAI(**client_kwargs)
        except openai.OpenAIError as e:
            raise ProviderError(self.name, str(e)) from e

        logger.info(f"OpenAI chat ready (model={self.settings.openai_model})")

    async def stop(self) -> None:
        if self.client:
            await self.client.close()
        self.client = None

    def _messages(self, prompt: str) -> list[dict]:
        return [{"role": "user", "content": prompt}]

    async def complete(self, prompt: str) -> str | None:
        if not self.client:
            raise ProviderError(self.name, "provider not started")

        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=self._messages(prompt),
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
            )
        except openai.OpenAIError as e:
            raise ProviderError(self.name, str(e)) from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def stream(self, prompt: str) -> AsyncIterator[str | None]:
        """Yield delta.content of each chunk (None for chunks without text)."""
        if not self.client:
            raise ProviderError(self.name, "provider not started")

        try:
            stream = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=self._messages(prompt),
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                stream=True,
            )
        except openai.OpenAIError as e:
            raise ProviderError(self.name, str(e)) from e

        try:
            async for chunk in stream:
                # Usage-only and keep-alive chunks carry no choices
                if not chunk.choices:
                    yield None
                    continue
                yield chunk.choices[0].delta.content
        except openai.OpenAIError as e:
            raise ProviderError(self.name, str(e)) from e
        finally:
            await stream.close()

    async def health_check(self) -> dict:
        return {
            "provider": self.name,
            "model": self.settings.openai_model,
            "status": "ready" if self.client else "stopped",
        }
