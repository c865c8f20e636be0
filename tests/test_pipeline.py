"""Tests for the relay pipeline — filter, sequencer, formatters, wire encoding."""

from dataclasses import FrozenInstanceError

import pytest

from chatrelay.providers.base import ProviderError
from chatrelay.relay.pipeline import (
    CHAT_MESSAGE_EVENT,
    SequencedEvent,
    encode_plain,
    filter_fragments,
    format_events,
    format_plain,
    sequence_fragments,
)
from fakes import agen


async def _collect(stream):
    return [item async for item in stream]


# ─── Fragment filter ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_filter_drops_none_and_empty():
    fragments = [None, "Valid", "", "Another", None]
    assert await _collect(filter_fragments(agen(fragments))) == ["Valid", "Another"]


@pytest.mark.asyncio
async def test_filter_keeps_whitespace_only_fragments():
    fragments = [" ", "\n", "\t", ""]
    assert await _collect(filter_fragments(agen(fragments))) == [" ", "\n", "\t"]


@pytest.mark.asyncio
async def test_filter_empty_stream():
    assert await _collect(filter_fragments(agen([]))) == []


@pytest.mark.asyncio
async def test_filter_propagates_failure_after_prior_fragments():
    error = ProviderError("fake", "boom")
    seen = []
    with pytest.raises(ProviderError) as exc_info:
        async for fragment in filter_fragments(agen(["a", None, "b"], error)):
            seen.append(fragment)

    assert exc_info.value is error
    assert seen == ["a", "b"]


# ─── Sequencer ───────────────────────────────────────────────


@pytest.mark.asyncio
async def test_sequence_starts_at_zero_and_counts_up():
    pairs = await _collect(sequence_fragments(agen(["Hello", " there", "!"])))
    assert pairs == [(0, "Hello"), (1, " there"), (2, "!")]


@pytest.mark.asyncio
async def test_sequence_ids_compact_after_filtering():
    fragments = [None, "Valid", "", "", None, "Another"]
    pairs = await _collect(sequence_fragments(filter_fragments(agen(fragments))))
    assert pairs == [(0, "Valid"), (1, "Another")]


@pytest.mark.asyncio
async def test_sequence_counter_is_per_call():
    first = await _collect(sequence_fragments(agen(["a", "b"])))
    second = await _collect(sequence_fragments(agen(["c"])))
    assert first == [(0, "a"), (1, "b")]
    assert second == [(0, "c")]


@pytest.mark.asyncio
async def test_sequence_no_index_for_failing_element():
    pairs = []
    with pytest.raises(ProviderError):
        async for pair in sequence_fragments(
            agen(["a", "b"], ProviderError("fake", "boom"))
        ):
            pairs.append(pair)
    assert pairs == [(0, "a"), (1, "b")]


# ─── Formatters ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_format_plain_passes_text_through():
    assert await _collect(format_plain(agen(["Hello", " there"]))) == [
        "Hello",
        " there",
    ]


@pytest.mark.asyncio
async def test_format_events_structure():
    events = await _collect(format_events(agen([(0, "Hello"), (1, " there")])))
    assert events == [
        SequencedEvent(id=0, data="Hello"),
        SequencedEvent(id=1, data=" there"),
    ]
    assert all(e.event == "chat.message" for e in events)


@pytest.mark.asyncio
async def test_closing_formatter_closes_upstream():
    closed = []

    async def source():
        try:
            for i in range(10):
                yield i, f"chunk-{i}"
        finally:
            closed.append(True)

    stream = format_events(source())
    first = await anext(stream)
    await stream.aclose()

    assert first.id == 0
    assert closed == [True]


def test_event_is_frozen():
    event = SequencedEvent(id=0, data="x")
    with pytest.raises(FrozenInstanceError):
        event.id = 5  # type: ignore


# ─── Wire encoding ───────────────────────────────────────────


def test_event_encode():
    event = SequencedEvent(id=0, data="Hello")
    assert event.encode() == "id: 0\nevent: chat.message\ndata: Hello\n\n"


def test_event_encode_multiline_data():
    event = SequencedEvent(id=3, data="line one\nline two")
    assert event.encode() == (
        "id: 3\nevent: chat.message\ndata: line one\ndata: line two\n\n"
    )


def test_event_encode_trailing_newline_kept():
    assert SequencedEvent(id=1, data="end\n").encode() == (
        "id: 1\nevent: chat.message\ndata: end\ndata: \n\n"
    )


def test_encode_plain_preserves_leading_space():
    assert encode_plain(" there") == "data:  there\n\n"


def test_encode_plain_crlf_split():
    assert encode_plain("a\r\nb\rc") == "data: a\ndata: b\ndata: c\n\n"


def test_event_type_constant():
    assert CHAT_MESSAGE_EVENT == "chat.message"
