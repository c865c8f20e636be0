"""
Chatrelay Configuration — single source of truth for all settings.

Reads from environment variables with sensible defaults.
A local .env file is loaded first if present.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class ProviderConfig:
    """LLM provider settings. Exactly one provider is served per process."""

    provider: str = "openai"
    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = ""
    # Anthropic
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    # Shared generation settings
    max_tokens: int = 1024
    temperature: float = 0.7
    timeout: float = 60.0  # seconds, passed to the SDK client

    @classmethod
    def from_env(cls) -> ProviderConfig:
        return cls(
            provider=os.getenv("CHATRELAY_PROVIDER", "openai"),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("CHATRELAY_OPENAI_MODEL", "gpt-4o-mini"),
            openai_base_url=os.getenv("CHATRELAY_OPENAI_BASE_URL", ""),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", ""),
            anthropic_model=os.getenv(
                "CHATRELAY_ANTHROPIC_MODEL", "claude-sonnet-4-20250514"
            ),
            max_tokens=int(os.getenv("CHATRELAY_MAX_TOKENS", "1024")),
            temperature=float(os.getenv("CHATRELAY_TEMPERATURE", "0.7")),
            timeout=float(os.getenv("CHATRELAY_PROVIDER_TIMEOUT", "60.0")),
        )


@dataclass(frozen=True)
class ServerConfig:
    """Server settings."""

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> ServerConfig:
        return cls(
            host=os.getenv("CHATRELAY_HOST", "0.0.0.0"),
            port=int(os.getenv("CHATRELAY_PORT", "8080")),
        )


@dataclass(frozen=True)
class ChatrelayConfig:
    """Root configuration."""

    provider: ProviderConfig = field(default_factory=ProviderConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> ChatrelayConfig:
        return cls(
            provider=ProviderConfig.from_env(),
            server=ServerConfig.from_env(),
        )


# Singleton — import the module and read config_module.config to see reloads
config = ChatrelayConfig.from_env()


def reload_config() -> ChatrelayConfig:
    """Re-read the environment and replace the module-level singleton."""
    global config
    config = ChatrelayConfig.from_env()
    return config
