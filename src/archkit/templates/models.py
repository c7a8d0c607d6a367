"""Data models and errors for the template store and renderer."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from .syntax import TRIM_CHARS


class PlaceholderType(str, Enum):
    """Type of placeholder."""

    INPUT = "input"  # {{INPUT}} - Caller's input text
    VARIABLE = "variable"  # {{VAR:Name:Opt1,Opt2}} - Named variable with options


class Placeholder(BaseModel):
    """Represents a placeholder in a template body."""

    name: str  # "INPUT" or the variable name
    type: PlaceholderType
    syntax: str  # Original syntax (e.g., "{{VAR:Lang:Python,Rust}}")
    options: list[str] = Field(default_factory=list)  # Raw options, first is the default
    start_pos: int = 0
    end_pos: int = 0

    @property
    def default(self) -> str:
        """Value used when the caller supplies none."""
        if not self.options:
            return ""
        return self.options[0].strip(TRIM_CHARS)


class StoreError(Exception):
    """Base class for failures loading the persisted template mapping."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class StoreNotFoundError(StoreError):
    """Raised when the persisted mapping does not exist."""

    def __init__(self, path: Path):
        super().__init__(
            f"Templates file not found at {path}. "
            f"Generate it with 'archkit convert <library.js>'.",
            path,
        )


class StoreCorruptError(StoreError):
    """Raised when the persisted mapping is not a JSON object of strings."""

    def __init__(self, path: Path, reason: str):
        self.reason = reason
        super().__init__(
            f"Templates file at {path} is invalid ({reason}). "
            f"Regenerate it with 'archkit convert <library.js>'.",
            path,
        )


class TemplateNotFoundError(Exception):
    """Raised when a template key is not in the mapping."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Template not found: {key}")
