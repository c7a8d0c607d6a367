"""Configuration management for archkit."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


INTERPOLATION_POLICIES = ("strict", "literal")


def _parse_interpolation_policy() -> str:
    """Parse the template interpolation policy from environment variable."""
    policy = os.getenv("ARCHKIT_INTERPOLATION", "strict").strip().lower()
    if policy in INTERPOLATION_POLICIES:
        return policy
    return "strict"


class Settings(BaseModel):
    """Application settings."""

    # Persisted template mapping (written by `archkit convert`, read by the store)
    templates_path: Path = Path(os.getenv("ARCHKIT_TEMPLATES_PATH", "data/templates.json"))

    # Source extraction
    source_marker: str = os.getenv("ARCHKIT_SOURCE_MARKER", "window.ARCH_LIBRARY")
    source_encoding: str = os.getenv("ARCHKIT_SOURCE_ENCODING", "utf-8")
    interpolation: str = _parse_interpolation_policy()  # 'strict' or 'literal'

    # Template used when the CLI gets none
    default_template: str = os.getenv("ARCHKIT_DEFAULT_TEMPLATE", "DEV")

    # LLM Provider settings ('none', 'anthropic' or 'openrouter')
    llm_provider: str = os.getenv("LLM_PROVIDER", "none")

    # Anthropic API key (required when LLM_PROVIDER=anthropic)
    anthropic_api_key: Optional[str] = os.getenv("ANTHROPIC_API_KEY")

    # OpenRouter API configuration (required when LLM_PROVIDER=openrouter)
    openrouter_api_key: Optional[str] = os.getenv("OPENROUTER_API_KEY")
    openrouter_model: str = os.getenv("OPENROUTER_MODEL", "anthropic/claude-3.5-sonnet")

    # Model configuration
    model_name: str = os.getenv("MODEL_NAME", "claude-sonnet-4-20250514")
    max_tokens: int = int(os.getenv("MAX_TOKENS", "4096"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()
