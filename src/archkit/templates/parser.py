"""Parser for listing the placeholders in a template body."""

import logging

from .models import Placeholder, PlaceholderType
from .syntax import INPUT_MARKER, TRIM_CHARS, VARIABLE_PATTERN, split_options

logger = logging.getLogger(__name__)


class TemplateParser:
    """Find placeholders in template bodies."""

    def extract_placeholders(self, body: str) -> list[Placeholder]:
        """
        Extract all placeholders from a template body, in order of appearance.

        Args:
            body: The template body to scan

        Returns:
            List of Placeholder objects found in the body
        """
        placeholders = []

        start = body.find(INPUT_MARKER)
        while start != -1:
            end = start + len(INPUT_MARKER)
            placeholders.append(
                Placeholder(
                    name="INPUT",
                    type=PlaceholderType.INPUT,
                    syntax=INPUT_MARKER,
                    start_pos=start,
                    end_pos=end,
                )
            )
            start = body.find(INPUT_MARKER, end)

        for match in VARIABLE_PATTERN.finditer(body):
            placeholders.append(
                Placeholder(
                    name=match.group(1),
                    type=PlaceholderType.VARIABLE,
                    syntax=match.group(0),
                    options=split_options(match.group(2)),
                    start_pos=match.start(),
                    end_pos=match.end(),
                )
            )

        placeholders.sort(key=lambda p: p.start_pos)
        logger.debug(f"Found {len(placeholders)} placeholders")
        return placeholders

    def variables(self, body: str) -> dict[str, list[str]]:
        """Map each VAR name to its trimmed options (first occurrence wins)."""
        result: dict[str, list[str]] = {}
        for placeholder in self.extract_placeholders(body):
            if placeholder.type == PlaceholderType.VARIABLE and placeholder.name not in result:
                result[placeholder.name] = [opt.strip(TRIM_CHARS) for opt in placeholder.options]
        return result

    def uses_input(self, body: str) -> bool:
        """Whether the body contains an {{INPUT}} placeholder."""
        return INPUT_MARKER in body
