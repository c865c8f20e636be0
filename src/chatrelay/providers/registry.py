"""
Provider Registry — pick the chat provider named in config.

Add a new provider? Just add an elif.
"""

from __future__ import annotations

import chatrelay.core.config as config_module
from chatrelay.providers.base import ChatProvider


def get_chat_provider() -> ChatProvider:
    provider = config_module.config.provider.provider.lower()
    if provider == "openai":
        from chatrelay.providers.openai_chat import OpenAIChatProvider

        return OpenAIChatProvider()
    elif provider == "anthropic":
        from chatrelay.providers.anthropic_chat import AnthropicChatProvider

        return AnthropicChatProvider()
    raise ValueError(f"Unknown chat provider: {provider}")
