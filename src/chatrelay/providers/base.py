"""
Provider base class — the boundary between the relay and an LLM vendor.

A provider turns a prompt into either one completed text value or an async
stream of text fragments. Fragments may be None or empty; filtering them is
the relay's job, not the provider's.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class ProviderError(Exception):
    """The upstream LLM call failed (network, provider fault, bad response)."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider
        self.message = message

    def __str__(self) -> str:
        return f"{self.provider}: {self.message}"


class ChatProvider(ABC):
    """Chat model provider interface."""

    name: str = "unknown"

    @abstractmethod
    async def start(self) -> None:
        ...

    @abstractmethod
    async def stop(self) -> None:
        ...

    @abstractmethod
    async def complete(self, prompt: str) -> str | None:
        """Return the full response text for a prompt, or None if there is none."""
        ...

    @abstractmethod
    def stream(self, prompt: str) -> AsyncIterator[str | None]:
        """Stream response fragments as they arrive.

        Implementations are async generators. The stream is finite and not
        restartable; on failure it raises ProviderError and yields nothing
        further. Closing the generator early must release the SDK stream.
        """
        ...

    async def health_check(self) -> dict:
        return {"provider": self.name, "status": "unknown"}
