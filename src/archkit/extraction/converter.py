"""Convert a template library source file into the persisted JSON mapping."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..config import settings
from .evaluator import LiteralEvaluator
from .extractor import LiteralExtractor
from .models import InterpolationPolicy

logger = logging.getLogger(__name__)


class LibraryConverter:
    """Run extraction, evaluation and persistence for one source file.

    Any failure aborts the whole conversion; nothing is written unless the
    full mapping was evaluated.
    """

    def __init__(
        self,
        marker: Optional[str] = None,
        interpolation: Union[InterpolationPolicy, str, None] = None,
        encoding: Optional[str] = None,
    ):
        self.marker = marker or settings.source_marker
        self.encoding = encoding or settings.source_encoding
        self.extractor = LiteralExtractor()
        self.evaluator = LiteralEvaluator(interpolation or settings.interpolation)

    def convert_text(self, source_text: str) -> dict[str, str]:
        """
        Extract and evaluate the template mapping from source text.

        Raises:
            ExtractionError: If the literal cannot be located, balanced or evaluated
        """
        result = self.extractor.extract(source_text, self.marker)
        logger.info(
            f"Extracted '{self.marker}' literal ({len(result.text)} chars, "
            f"offsets {result.start}-{result.end})"
        )
        return self.evaluator.evaluate(result.text)

    def convert(self, input_path: Path, output_path: Optional[Path] = None) -> dict[str, str]:
        """
        Convert a library source file and write the JSON mapping.

        Args:
            input_path: Source file containing the marker assignment
            output_path: Destination JSON file (defaults to settings.templates_path)

        Returns:
            The mapping that was written

        Raises:
            FileNotFoundError: If the input file does not exist
            UnicodeDecodeError: If the input is not valid in the configured encoding
            ExtractionError: If extraction or evaluation fails
        """
        input_path = Path(input_path)
        output_path = Path(output_path or settings.templates_path)

        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")

        source_text = input_path.read_text(encoding=self.encoding)
        templates = self.convert_text(source_text)
        write_templates(templates, output_path)
        logger.info(f"Converted {input_path} -> {output_path} ({len(templates)} templates)")
        return templates


def write_templates(templates: dict[str, str], output_path: Path):
    """Persist a template mapping as pretty-printed JSON.

    The JSON goes to a temporary file beside the target, which then replaces
    it, so a failed write leaves any previous mapping intact.
    """
    data = json.dumps(templates, indent=2, ensure_ascii=False).encode("utf-8")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent, prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, output_path)
    except BaseException:
        os.unlink(tmp_name)
        raise


def convert_library(
    input_path: Path,
    output_path: Optional[Path] = None,
    marker: Optional[str] = None,
    interpolation: Union[InterpolationPolicy, str, None] = None,
) -> dict[str, str]:
    """Convert a library source file into the persisted template mapping."""
    return LibraryConverter(marker=marker, interpolation=interpolation).convert(
        input_path, output_path
    )
