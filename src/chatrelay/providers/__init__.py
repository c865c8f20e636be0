"""
Chatrelay Providers — one interface, one implementation per LLM vendor.

Concrete implementations (OpenAI, Anthropic) live alongside and are
selected by CHATRELAY_PROVIDER.
"""

from chatrelay.providers.base import ChatProvider, ProviderError
from chatrelay.providers.registry import get_chat_provider

__all__ = [
    "ChatProvider",
    "ProviderError",
    "get_chat_provider",
]
