"""LLM client module."""

from typing import Optional

from ..config import Settings, settings as default_settings
from .base import LLMClient, LLMResponse
from .anthropic_client import AnthropicClient
from .openrouter_client import OpenRouterClient


def create_client(config: Optional[Settings] = None) -> Optional[LLMClient]:
    """Create the client for the configured provider, or None when disabled.

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    config = config or default_settings
    provider = config.llm_provider.lower()

    if provider in ("", "none"):
        return None
    if provider == "anthropic":
        if not config.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY is required when LLM_PROVIDER=anthropic")
        return AnthropicClient(api_key=config.anthropic_api_key)
    if provider == "openrouter":
        if not config.openrouter_api_key:
            raise ValueError("OPENROUTER_API_KEY is required when LLM_PROVIDER=openrouter")
        return OpenRouterClient(api_key=config.openrouter_api_key)
    raise ValueError(f"Unknown LLM provider: {config.llm_provider}")


def model_for(config: Optional[Settings] = None) -> str:
    """Model name to use with the configured provider."""
    config = config or default_settings
    if config.llm_provider.lower() == "openrouter":
        return config.openrouter_model
    return config.model_name


__all__ = [
    "LLMClient",
    "LLMResponse",
    "AnthropicClient",
    "OpenRouterClient",
    "create_client",
    "model_for",
]
