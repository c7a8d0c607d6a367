"""Source-literal extraction.

Locates the object literal assigned to a marker identifier inside a source
file, cuts it out as balanced text and evaluates it into a mapping of
template key to template body.
"""

from .models import (
    QuoteMode,
    InterpolationPolicy,
    ExtractionResult,
    ExtractionError,
    MarkerNotFoundError,
    AssignmentNotFoundError,
    ObjectLiteralNotFoundError,
    UnbalancedDelimitersError,
    EvaluationError,
)
from .extractor import LiteralExtractor, extract_literal
from .evaluator import LiteralEvaluator, evaluate
from .converter import LibraryConverter, convert_library, write_templates

__all__ = [
    "QuoteMode",
    "InterpolationPolicy",
    "ExtractionResult",
    "ExtractionError",
    "MarkerNotFoundError",
    "AssignmentNotFoundError",
    "ObjectLiteralNotFoundError",
    "UnbalancedDelimitersError",
    "EvaluationError",
    "LiteralExtractor",
    "extract_literal",
    "LiteralEvaluator",
    "evaluate",
    "LibraryConverter",
    "convert_library",
    "write_templates",
]
