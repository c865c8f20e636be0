"""
Chat API — single-shot and streaming endpoints.

Endpoints:
    POST /chat             → full response as a JSON string
    POST /chat/stream      → text/event-stream, one data record per fragment
    POST /chat/stream-sse  → text/event-stream, id/event/data record per fragment

A provider failure mid-stream aborts the connection; events already sent
stay delivered and no closing event is written.
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from typing import TYPE_CHECKING, AsyncIterator, Callable, TypeVar

from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from chatrelay.relay.pipeline import SequencedEvent, encode_plain

if TYPE_CHECKING:
    from chatrelay.relay.service import ChatService

logger = logging.getLogger(__name__)

T = TypeVar("T")

BLANK_MESSAGE = "must not be blank"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

_BAD_REQUEST = {
    400: {"description": "Invalid request (blank or missing message)"},
}


class ChatRequest(BaseModel):
    """Chat request containing a message to be sent to the model."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={"examples": [{"message": "Hello there!"}]},
    )

    message: str | None = Field(
        default=None,
        validate_default=True,
        description="The message content to send to the model",
    )

    @field_validator("message")
    @classmethod
    def _not_blank(cls, value: str | None) -> str:
        if value is None or not value.strip():
            raise PydanticCustomError("not_blank", BLANK_MESSAGE)
        return value


async def _encode(
    items: AsyncIterator[T], encode: Callable[[T], str]
) -> AsyncIterator[str]:
    async with aclosing(items) as upstream:
        async for item in upstream:
            yield encode(item)


def _event_stream(body: AsyncIterator[str]) -> StreamingResponse:
    return StreamingResponse(
        body,
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


def create_chat_router(service: "ChatService") -> APIRouter:
    """Create the chat router bound to a ChatService."""

    router = APIRouter(prefix="/chat", tags=["Chat"])

    @router.post(
        "",
        summary="Chat response",
        description="Sends a message to the model and returns the complete response text",
        responses=_BAD_REQUEST,
    )
    async def chat(request: ChatRequest) -> str:
        return await service.complete(request.message)

    @router.post(
        "/stream",
        response_class=StreamingResponse,
        summary="Stream chat response",
        description="Sends a message to the model and streams back the response as text chunks",
        responses={
            200: {"content": {"text/event-stream": {}}},
            **_BAD_REQUEST,
        },
    )
    async def stream_chat(request: ChatRequest) -> StreamingResponse:
        return _event_stream(
            _encode(service.stream_text(request.message), encode_plain)
        )

    @router.post(
        "/stream-sse",
        response_class=StreamingResponse,
        summary="Stream chat response with Server-Sent Events",
        description=(
            "Sends a message to the model and streams back the response as "
            "structured Server-Sent Events with event IDs"
        ),
        responses={
            200: {"content": {"text/event-stream": {}}},
            **_BAD_REQUEST,
        },
    )
    async def stream_chat_sse(request: ChatRequest) -> StreamingResponse:
        return _event_stream(
            _encode(service.stream_events(request.message), SequencedEvent.encode)
        )

    return router
