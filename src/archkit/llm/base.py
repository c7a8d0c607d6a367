"""Base LLM client interface."""

from abc import ABC, abstractmethod
from typing import Optional
from dataclasses import dataclass


@dataclass
class LLMResponse:
    """Response from LLM."""

    text: str
    model: str
    stop_reason: Optional[str] = None
    usage: Optional[dict] = None


class LLMClient(ABC):
    """Abstract base class for LLM clients.

    Clients are opaque text producers: a rendered prompt goes in, free-form
    text comes out.
    """

    @abstractmethod
    def generate(self, prompt: str, model: str, max_tokens: int) -> LLMResponse:
        """Send a prompt to the LLM and return its text."""
        pass
