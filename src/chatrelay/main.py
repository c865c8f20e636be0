"""
Chatrelay — HTTP façade over one LLM provider.

Forwards a message to OpenAI or Anthropic (CHATRELAY_PROVIDER) and relays
the answer back whole, as plain text/event-stream chunks, or as numbered
chat.message Server-Sent Events.

Run: uv run uvicorn chatrelay.main:app --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse

import chatrelay.core.config as config_module
from chatrelay import __version__
from chatrelay.core.logging import setup_logging
from chatrelay.http.chat import create_chat_router
from chatrelay.http.errors import register_error_handlers
from chatrelay.providers import ChatProvider, get_chat_provider
from chatrelay.relay.service import ChatService

# --- Setup ---
setup_logging()
logger = logging.getLogger("chatrelay")


def create_app(provider: ChatProvider | None = None) -> FastAPI:
    """Build the app around a provider (the configured one by default)."""
    provider = provider or get_chat_provider()
    service = ChatService(provider)

    app = FastAPI(
        title="Chatrelay",
        version=__version__,
        description="Streaming chat API relaying a single LLM provider",
    )
    register_error_handlers(app)
    app.include_router(create_chat_router(service))

    @app.on_event("startup")
    async def startup():
        await provider.start()
        logger.info("Chatrelay v%s ready (provider=%s)", __version__, provider.name)

    @app.on_event("shutdown")
    async def shutdown():
        await provider.stop()

    @app.get("/health")
    async def health():
        """Health check — reports provider status."""
        return JSONResponse(
            {
                "status": "ok",
                "version": __version__,
                "provider": await provider.health_check(),
            }
        )

    return app


app = create_app()


def run() -> None:
    import uvicorn

    server = config_module.config.server
    uvicorn.run("chatrelay.main:app", host=server.host, port=server.port)


if __name__ == "__main__":
    run()
