"""
Relay pipeline — provider fragments in, client-ready events out.

    provider.stream(prompt)
        → filter_fragments      drop None / "" (whitespace is kept)
        → sequence_fragments    attach 0, 1, 2, ... in arrival order
        → format_plain / format_events
        → encode_plain / SequencedEvent.encode   (text/event-stream wire)

Every stage is an async generator over the previous one. Nothing is buffered,
nothing is shared between calls, and exceptions from upstream pass through
untouched. Closing a stage closes everything above it, down to the provider.
"""

from __future__ import annotations

import re
from contextlib import aclosing
from dataclasses import dataclass
from typing import AsyncIterable, AsyncIterator

# Event type tag clients subscribe to (EventSource.addEventListener)
CHAT_MESSAGE_EVENT = "chat.message"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class SequencedEvent:
    """One fragment of a structured stream, with its per-request id."""

    id: int
    data: str
    event: str = CHAT_MESSAGE_EVENT

    def encode(self) -> str:
        """Render as one Server-Sent Events record."""
        return f"id: {self.id}\nevent: {self.event}\n{_data_lines(self.data)}\n"


def _data_lines(data: str) -> str:
    # One data: line per source line so EventSource rejoins them with "\n"
    return "".join(f"data: {line}\n" for line in _LINE_BREAK.split(data))


def encode_plain(text: str) -> str:
    """Render a bare chunk as a data-only Server-Sent Events record."""
    return f"{_data_lines(text)}\n"


async def filter_fragments(
    fragments: AsyncIterable[str | None],
) -> AsyncIterator[str]:
    """Drop absent and zero-length fragments."""
    async with aclosing(aiter(fragments)) as upstream:
        async for fragment in upstream:
            if fragment:
                yield fragment


async def sequence_fragments(
    fragments: AsyncIterable[str],
) -> AsyncIterator[tuple[int, str]]:
    """Pair each fragment with its arrival index, starting at 0 for every call."""
    index = 0
    async with aclosing(aiter(fragments)) as upstream:
        async for fragment in upstream:
            yield index, fragment
            index += 1


async def format_plain(fragments: AsyncIterable[str]) -> AsyncIterator[str]:
    """Plain mode: the fragment text itself, no id and no event type."""
    async with aclosing(aiter(fragments)) as upstream:
        async for fragment in upstream:
            yield fragment


async def format_events(
    pairs: AsyncIterable[tuple[int, str]],
) -> AsyncIterator[SequencedEvent]:
    """Structured mode: one chat.message event per (index, fragment) pair."""
    async with aclosing(aiter(pairs)) as upstream:
        async for index, fragment in upstream:
            yield SequencedEvent(id=index, data=fragment)
