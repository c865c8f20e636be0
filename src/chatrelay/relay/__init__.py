"""
Relay Package — turns a provider's fragment stream into client events.

- pipeline: filter, sequencer, formatters and the text/event-stream encoding
- service: ChatService, one fresh pipeline per request
"""

from chatrelay.relay.pipeline import (
    CHAT_MESSAGE_EVENT,
    SequencedEvent,
    encode_plain,
    filter_fragments,
    format_events,
    format_plain,
    sequence_fragments,
)
from chatrelay.relay.service import ChatService

__all__ = [
    "CHAT_MESSAGE_EVENT",
    "SequencedEvent",
    "encode_plain",
    "filter_fragments",
    "format_events",
    "format_plain",
    "sequence_fragments",
    "ChatService",
]
