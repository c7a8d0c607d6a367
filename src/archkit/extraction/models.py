"""Data models and errors for source-literal extraction."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class QuoteMode(str, Enum):
    """Active quoting regime while scanning a literal."""

    NONE = "none"
    SINGLE = "single"  # '...'
    DOUBLE = "double"  # "..."
    BACKTICK = "backtick"  # `...`


QUOTE_CHARS: dict[str, QuoteMode] = {
    "'": QuoteMode.SINGLE,
    '"': QuoteMode.DOUBLE,
    "`": QuoteMode.BACKTICK,
}


class InterpolationPolicy(str, Enum):
    """How `${...}` inside backtick strings is evaluated."""

    STRICT = "strict"  # fail the whole evaluation
    LITERAL = "literal"  # keep the `${...}` text verbatim


class ExtractionResult(BaseModel):
    """An object literal located inside a source file."""

    text: str  # Exact literal text, from '{' through the matching '}'
    marker: str  # Marker identifier that was searched for
    start: int  # Offset of the opening brace
    end: int  # Offset just past the closing brace
    depth_max: int = 1  # Deepest brace nesting seen


class ExtractionError(Exception):
    """Base class for literal extraction failures."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)


class MarkerNotFoundError(ExtractionError):
    """Raised when the marker identifier does not occur in the source."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"Marker '{marker}' not found in source", offset=0)


class AssignmentNotFoundError(ExtractionError):
    """Raised when no '=' follows the marker."""

    def __init__(self, marker: str, offset: int):
        self.marker = marker
        super().__init__(f"No '=' found after marker '{marker}'", offset=offset)


class ObjectLiteralNotFoundError(ExtractionError):
    """Raised when no '{' follows the assignment."""

    def __init__(self, offset: int):
        super().__init__("No '{' found to start the object literal", offset=offset)


class UnbalancedDelimitersError(ExtractionError):
    """Raised when the input ends before the literal's braces balance."""

    def __init__(self, offset: int, depth: int, quote_mode: QuoteMode):
        self.depth = depth
        self.quote_mode = quote_mode
        detail = f"{depth} unclosed brace(s)"
        if quote_mode != QuoteMode.NONE:
            detail += f", inside an unterminated {quote_mode.value}-quoted string"
        super().__init__(f"Could not balance braces: {detail}", offset=offset)


class EvaluationError(ExtractionError):
    """Raised when a literal cannot be evaluated into a concrete value."""

    def __init__(self, reason: str, offset: Optional[int] = None):
        self.reason = reason
        super().__init__(f"Evaluation failed: {reason}", offset=offset)
