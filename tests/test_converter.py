"""Tests for the library conversion pipeline."""

import json
from unittest.mock import patch

import pytest

from archkit.extraction import (
    EvaluationError,
    LibraryConverter,
    MarkerNotFoundError,
    UnbalancedDelimitersError,
    convert_library,
    write_templates,
)
from archkit.templates import TemplateStore


class TestLibraryConverter:
    """Test LibraryConverter."""

    def test_convert_writes_json(self, library_file, tmp_path):
        """Test a full conversion writes a JSON object of strings."""
        output = tmp_path / "out" / "nested" / "templates.json"

        templates = convert_library(library_file, output, marker="window.ARCH_LIBRARY")

        assert output.exists()
        assert json.loads(output.read_text(encoding="utf-8")) == templates
        assert set(templates) == {"DEV", "DOC_GEN", "REVIEW", "BRACES"}

    def test_written_file_loads_in_store(self, library_file, tmp_path):
        """Test the store reads what the converter writes."""
        output = tmp_path / "templates.json"
        templates = LibraryConverter(marker="window.ARCH_LIBRARY").convert(library_file, output)

        assert TemplateStore(output).load() == templates

    def test_non_ascii_preserved(self, tmp_path):
        """Test non-ASCII text is written unescaped."""
        source = tmp_path / "lib.js"
        source.write_text("X = { ES: 'Análisis de código: {{INPUT}}' };", encoding="utf-8")
        output = tmp_path / "templates.json"

        LibraryConverter(marker="X").convert(source, output)

        assert "Análisis" in output.read_text(encoding="utf-8")

    def test_missing_input_file(self, tmp_path):
        """Test a missing input file."""
        with pytest.raises(FileNotFoundError):
            LibraryConverter(marker="X").convert(tmp_path / "nope.js", tmp_path / "t.json")

    def test_marker_error_writes_nothing(self, library_file, tmp_path):
        """Test a failed extraction leaves no output file."""
        output = tmp_path / "templates.json"
        with pytest.raises(MarkerNotFoundError):
            LibraryConverter(marker="window.OTHER").convert(library_file, output)

        assert not output.exists()

    def test_unbalanced_source(self, tmp_path):
        """Test an unbalanced source file."""
        source = tmp_path / "lib.js"
        source.write_text("X = { a: {", encoding="utf-8")

        with pytest.raises(UnbalancedDelimitersError):
            LibraryConverter(marker="X").convert(source, tmp_path / "t.json")

    def test_interpolation_policy(self, tmp_path):
        """Test strict and literal interpolation policies end to end."""
        source = tmp_path / "lib.js"
        source.write_text("const v = 2;\nX = { A: `v${v}` };", encoding="utf-8")
        output = tmp_path / "templates.json"

        with pytest.raises(EvaluationError):
            LibraryConverter(marker="X", interpolation="strict").convert(source, output)
        assert not output.exists()

        templates = LibraryConverter(marker="X", interpolation="literal").convert(source, output)
        assert templates == {"A": "v${v}"}

    def test_convert_text(self, library_source):
        """Test converting text without touching disk."""
        templates = LibraryConverter(marker="window.ARCH_LIBRARY").convert_text(library_source)

        assert templates["BRACES"] == "Literal } and { inside a string"

    def test_surrogate_pair_written_as_utf8(self, tmp_path):
        """Test an escaped surrogate pair is persisted as one character."""
        source = tmp_path / "lib.js"
        source.write_text(r'X = { A: "hi \uD83D\uDE00" };', encoding="utf-8")
        output = tmp_path / "templates.json"

        LibraryConverter(marker="X").convert(source, output)

        assert TemplateStore(output).load() == {"A": "hi \U0001F600"}

    def test_failed_conversion_keeps_existing_file(self, tmp_path):
        """Test a failing conversion leaves the previous mapping untouched."""
        source = tmp_path / "lib.js"
        source.write_text(r'X = { A: "lone \uD83D" };', encoding="utf-8")
        output = tmp_path / "templates.json"
        output.write_text('{"OLD": "kept"}', encoding="utf-8")

        with pytest.raises(EvaluationError, match="Unpaired surrogate"):
            LibraryConverter(marker="X").convert(source, output)

        assert json.loads(output.read_text(encoding="utf-8")) == {"OLD": "kept"}


class TestWriteTemplates:
    """Test write_templates."""

    def test_replaces_existing_file(self, tmp_path):
        """Test the target is replaced and no temporary file is left behind."""
        output = tmp_path / "templates.json"
        output.write_text('{"OLD": "kept"}', encoding="utf-8")

        write_templates({"NEW": "x"}, output)

        assert json.loads(output.read_text(encoding="utf-8")) == {"NEW": "x"}
        assert [p.name for p in tmp_path.iterdir()] == ["templates.json"]

    def test_failed_write_keeps_existing_file(self, tmp_path):
        """Test an unencodable mapping does not truncate the target."""
        output = tmp_path / "templates.json"
        output.write_text('{"OLD": "kept"}', encoding="utf-8")

        with pytest.raises(UnicodeEncodeError):
            write_templates({"BAD": "\ud83d"}, output)

        assert output.read_text(encoding="utf-8") == '{"OLD": "kept"}'
        assert [p.name for p in tmp_path.iterdir()] == ["templates.json"]

    def test_interrupted_replace_removes_temp_file(self, tmp_path):
        """Test the temporary file is cleaned up when the replace fails."""
        output = tmp_path / "templates.json"

        with patch("archkit.extraction.converter.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                write_templates({"A": "x"}, output)

        assert list(tmp_path.iterdir()) == []
