"""Template store and renderer.

Loads the persisted mapping of template key to template body and renders
templates by filling in {{INPUT}} and {{VAR:Name:Options}} placeholders.
"""

from .models import (
    Placeholder,
    PlaceholderType,
    StoreError,
    StoreNotFoundError,
    StoreCorruptError,
    TemplateNotFoundError,
)
from .parser import TemplateParser
from .store import TemplateStore
from .renderer import TemplateRenderer, render_text

__all__ = [
    "Placeholder",
    "PlaceholderType",
    "StoreError",
    "StoreNotFoundError",
    "StoreCorruptError",
    "TemplateNotFoundError",
    "TemplateParser",
    "TemplateStore",
    "TemplateRenderer",
    "render_text",
]
