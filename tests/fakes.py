"""
Test doubles and helpers shared across test modules.

FakeProvider stands in for the vendor SDKs: it replays a fixed list of
fragments, optionally fails afterwards, and records every call.
"""

from __future__ import annotations

from chatrelay.providers.base import ChatProvider
class FakeProvider(ChatProvider):
    name = "fake"

    def __init__(
        self,
        fragments: list[str | None] | None = None,
        result: str | None = "",
        error: Exception | None = None,
    ):
        self.fragments = list(fragments or [])
        self.result = result
        self.error = error  # raised after all fragments (or instead of result)
        self.complete_calls: list[str] = []
        self.stream_calls: list[str] = []
        self.pulled = 0
        self.closed = False
        self.started = False

    async def start(self) -> None:
        self.started = True

    async def stop(self) -> None:
        self.started = False

    async def complete(self, prompt: str) -> str | None:
        self.complete_calls.append(prompt)
        if self.error:
            raise self.error
        return self.result

    async def stream(self, prompt: str):
        self.stream_calls.append(prompt)
        try:
            for fragment in self.fragments:
                self.pulled += 1
                yield fragment
            if self.error:
                raise self.error
        finally:
            self.closed = True


async def agen(items, error: Exception | None = None):
    """Async generator over items, raising error at the end if given."""
    for item in items:
        yield item
    if error:
        raise error


def parse_sse(body: str) -> list[dict]:
    """Split a text/event-stream body into records of field → value."""
    records = []
    for block in body.split("\n\n"):
        if not block:
            continue
        record: dict = {}
        for line in block.split("\n"):
            name, _, value = line.partition(":")
            if value.startswith(" "):
                value = value[1:]
            if name == "data" and "data" in record:
                record["data"] += "\n" + value
            else:
                record[name] = value
        records.append(record)
    return records


