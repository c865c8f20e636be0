"""Chatrelay — relay chat messages to an LLM provider over HTTP and SSE."""

__version__ = "0.1.0"
