"""Locate and cut an object literal out of arbitrary source text."""

import logging

from .models import (
    QUOTE_CHARS,
    AssignmentNotFoundError,
    ExtractionResult,
    MarkerNotFoundError,
    ObjectLiteralNotFoundError,
    QuoteMode,
    UnbalancedDelimitersError,
)

logger = logging.getLogger(__name__)


class LiteralExtractor:
    """Extract the object literal assigned to a marker identifier.

    The scan is a single forward pass that only understands quoting,
    backslash escapes and brace depth. It is not a tokenizer: comments,
    regex literals and quote doubling are not recognised.
    """

    def locate(self, source_text: str, marker: str) -> int:
        """
        Find the opening brace of the literal assigned to ``marker``.

        Args:
            source_text: The full source text
            marker: Identifier whose assignment is searched for

        Returns:
            Offset of the opening '{'

        Raises:
            MarkerNotFoundError: If the marker does not occur
            AssignmentNotFoundError: If no '=' follows the marker
            ObjectLiteralNotFoundError: If no '{' follows the '='
        """
        marker_pos = source_text.find(marker)
        if marker_pos == -1:
            raise MarkerNotFoundError(marker)

        eq_pos = source_text.find("=", marker_pos)
        if eq_pos == -1:
            raise AssignmentNotFoundError(marker, marker_pos)

        brace_pos = source_text.find("{", eq_pos)
        if brace_pos == -1:
            raise ObjectLiteralNotFoundError(eq_pos)

        logger.debug(f"Marker '{marker}' at {marker_pos}, '=' at {eq_pos}, '{{' at {brace_pos}")
        return brace_pos

    def extract(self, source_text: str, marker: str) -> ExtractionResult:
        """
        Extract the balanced object literal assigned to ``marker``.

        Args:
            source_text: The full source text
            marker: Identifier whose assignment is searched for

        Returns:
            ExtractionResult holding the exact literal text and its span

        Raises:
            ExtractionError: Any of the locate errors, or
                UnbalancedDelimitersError if the input ends first
        """
        start = self.locate(source_text, marker)

        depth = 0
        depth_max = 0
        quote_mode = QuoteMode.NONE
        escaped = False

        for pos in range(start, len(source_text)):
            ch = source_text[pos]

            if escaped:
                escaped = False
                continue

            if ch == "\\":
                escaped = True
                continue

            if quote_mode != QuoteMode.NONE:
                if QUOTE_CHARS.get(ch) == quote_mode:
                    quote_mode = QuoteMode.NONE
                continue

            if ch in QUOTE_CHARS:
                quote_mode = QUOTE_CHARS[ch]
            elif ch == "{":
                depth += 1
                depth_max = max(depth_max, depth)
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    end = pos + 1
                    logger.debug(
                        f"Extracted literal for '{marker}': {end - start} chars, "
                        f"max depth {depth_max}"
                    )
                    return ExtractionResult(
                        text=source_text[start:end],
                        marker=marker,
                        start=start,
                        end=end,
                        depth_max=depth_max,
                    )

        raise UnbalancedDelimitersError(start, depth, quote_mode)


def extract_literal(source_text: str, marker: str) -> str:
    """Return the exact text of the object literal assigned to ``marker``."""
    return LiteralExtractor().extract(source_text, marker).text
