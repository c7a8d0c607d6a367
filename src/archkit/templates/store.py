"""Read-only store for the persisted template mapping."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from ..config import settings
from .models import StoreCorruptError, StoreNotFoundError, TemplateNotFoundError

logger = logging.getLogger(__name__)


class TemplateStore:
    """Loads the template mapping once and serves lookups from memory.

    Construct one store at startup and hand it to every consumer. The first
    successful ``load()`` populates the cache; later changes to the file on
    disk are not picked up until a new store is created.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.templates_path)
        self._templates: Optional[dict[str, str]] = None

    @property
    def is_loaded(self) -> bool:
        return self._templates is not None

    def load(self) -> dict[str, str]:
        """
        Load the mapping from disk, or return the cached copy.

        Returns:
            Dict of template key to template body

        Raises:
            StoreNotFoundError: If the templates file does not exist
            StoreCorruptError: If the file is not a JSON object of strings
        """
        if self._templates is not None:
            return self._templates

        if not self.path.exists():
            raise StoreNotFoundError(self.path)

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StoreCorruptError(self.path, f"not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StoreCorruptError(self.path, f"expected an object, got {type(data).__name__}")

        for key, body in data.items():
            if not isinstance(body, str):
                raise StoreCorruptError(
                    self.path, f"template '{key}' is {type(body).__name__}, not a string"
                )

        self._templates = data
        logger.info(f"Loaded {len(data)} templates from {self.path}")
        return self._templates

    async def aload(self) -> dict[str, str]:
        """Async version of load that reads the file off the event loop."""
        if self._templates is not None:
            return self._templates
        return await asyncio.to_thread(self.load)

    def get(self, key: str) -> str:
        """
        Get a template body by key.

        Raises:
            TemplateNotFoundError: If the key is not in the mapping
        """
        templates = self.load()
        if key not in templates:
            raise TemplateNotFoundError(key)
        return templates[key]

    def keys(self) -> list[str]:
        """Template keys in file order."""
        return list(self.load().keys())

    def __contains__(self, key: str) -> bool:
        return key in self.load()
