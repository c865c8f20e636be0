"""
Chat Service — runs one request through the provider and the relay pipeline.

Three entry points, one per response shape:
    complete(message)       → full text, never None
    stream_text(message)    → filtered fragments (plain mode)
    stream_events(message)  → SequencedEvent per fragment (structured mode)

Each call builds a fresh pipeline; the only state is the provider client.
Provider failures are logged here and re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from contextlib import aclosing
from typing import AsyncIterator, TypeVar

from chatrelay.providers.base import ChatProvider, ProviderError
from chatrelay.relay.pipeline import (
    SequencedEvent,
    filter_fragments,
    format_events,
    format_plain,
    sequence_fragments,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChatService:
    """
    Relays chat requests to one provider.

    The service does NOT handle:
    - Request validation (the router rejects blank messages first)
    - Transport framing (the router encodes events for the wire)
    """

    def __init__(self, provider: ChatProvider):
        self.provider = provider

    async def complete(self, message: str) -> str:
        request_id = uuid.uuid4().hex[:8]
        started = time.monotonic()
        try:
            text = await self.provider.complete(message)
        except ProviderError as e:
            logger.error(
                "Chat %s failed: %s",
                request_id,
                e,
                exc_info=True,
                extra=self._extra(request_id, "complete", started, status="failed"),
            )
            raise

        result = text if text is not None else ""
        logger.info(
            "Chat %s completed (%d chars)",
            request_id,
            len(result),
            extra=self._extra(request_id, "complete", started, status="completed"),
        )
        return result

    def stream_text(self, message: str) -> AsyncIterator[str]:
        fragments = filter_fragments(self.provider.stream(message))
        return self._observe(format_plain(fragments), mode="plain")

    def stream_events(self, message: str) -> AsyncIterator[SequencedEvent]:
        pairs = sequence_fragments(filter_fragments(self.provider.stream(message)))
        return self._observe(format_events(pairs), mode="structured")

    async def _observe(self, items: AsyncIterator[T], mode: str) -> AsyncIterator[T]:
        """Log the lifecycle of one stream without altering what flows through it."""
        request_id = uuid.uuid4().hex[:8]
        started = time.monotonic()
        count = 0
        logger.debug("Stream %s started (mode=%s)", request_id, mode)

        async with aclosing(items) as upstream:
            try:
                async for item in upstream:
                    count += 1
                    yield item
            except ProviderError as e:
                logger.error(
                    "Stream %s failed after %d events: %s",
                    request_id,
                    count,
                    e,
                    exc_info=True,
                    extra=self._extra(
                        request_id, mode, started, status="failed", events=count
                    ),
                )
                raise
            except (GeneratorExit, asyncio.CancelledError):
                logger.info(
                    "Stream %s closed by client after %d events",
                    request_id,
                    count,
                    extra=self._extra(
                        request_id, mode, started, status="cancelled", events=count
                    ),
                )
                raise

        logger.info(
            "Stream %s completed (%d events)",
            request_id,
            count,
            extra=self._extra(
                request_id, mode, started, status="completed", events=count
            ),
        )

    def _extra(
        self,
        request_id: str,
        mode: str,
        started: float,
        status: str,
        events: int | None = None,
    ) -> dict:
        extra = {
            "request_id": request_id,
            "provider": self.provider.name,
            "mode": mode,
            "status": status,
            "duration_ms": round((time.monotonic() - started) * 1000, 1),
        }
        if events is not None:
            extra["events"] = events
        return extra
