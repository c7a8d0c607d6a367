"""Tests for the object-literal extractor."""

import pytest

from archkit.extraction import (
    AssignmentNotFoundError,
    ExtractionError,
    LiteralExtractor,
    MarkerNotFoundError,
    ObjectLiteralNotFoundError,
    QuoteMode,
    UnbalancedDelimitersError,
    extract_literal,
)


class TestLocate:
    """Test locating the literal's opening brace."""

    def test_marker_not_found(self):
        """Test missing marker is reported."""
        with pytest.raises(MarkerNotFoundError) as exc_info:
            extract_literal("const y = { a: 1 };", "X")

        assert exc_info.value.marker == "X"
        assert exc_info.value.offset == 0

    def test_assignment_not_found(self):
        """Test marker without any '=' afterwards."""
        source = "let a = 1;\nwindow.LIB"
        with pytest.raises(AssignmentNotFoundError) as exc_info:
            extract_literal(source, "window.LIB")

        assert exc_info.value.offset == source.index("window.LIB")

    def test_object_literal_not_found(self):
        """Test assignment that is never followed by a brace."""
        source = "X = [1, 2, 3];"
        with pytest.raises(ObjectLiteralNotFoundError) as exc_info:
            extract_literal(source, "X")

        assert exc_info.value.offset == source.index("=")

    def test_errors_share_base_class(self):
        """Test all locate errors are ExtractionErrors."""
        for source in ("nothing here", "X", "X ="):
            with pytest.raises(ExtractionError):
                extract_literal(source, "X")

    def test_first_occurrence_of_marker_is_used(self):
        """Test that the first marker occurrence drives the search."""
        source = "X = { first: 'a' };\nX = { second: 'b' };"
        assert extract_literal(source, "X") == "{ first: 'a' }"


class TestExtract:
    """Test scanning for the balanced literal."""

    def test_simple_literal(self):
        """Test extracting a flat literal."""
        assert extract_literal("X = { a: 1 };", "X") == "{ a: 1 }"

    def test_nested_objects(self):
        """Test nested braces are balanced by depth."""
        source = "X = { a: { b: { c: 1 } }, d: {} }; trailing { }"
        result = LiteralExtractor().extract(source, "X")

        assert result.text == "{ a: { b: { c: 1 } }, d: {} }"
        assert result.depth_max == 3
        assert source[result.start:result.end] == result.text

    def test_brace_inside_double_quotes(self):
        """Test a brace inside a double-quoted string does not change depth."""
        assert extract_literal('X = { a: "{" }', "X") == '{ a: "{" }'

    def test_closing_brace_inside_strings(self):
        """Test closing braces inside all three quote styles are inert."""
        source = "X = { a: '}', b: \"}\", c: `}}` };"
        assert extract_literal(source, "X") == "{ a: '}', b: \"}\", c: `}}` }"

    def test_escaped_quote_keeps_string_open(self):
        """Test a backslash before the active quote does not close it."""
        source = 'X = { a: "a\\"b" }'
        assert extract_literal(source, "X") == '{ a: "a\\"b" }'

    def test_other_quotes_inert_inside_string(self):
        """Test a double quote inside a backtick string does not toggle modes."""
        source = 'X = { a: `say "hi" and \'bye\' }` };'
        assert extract_literal(source, "X") == '{ a: `say "hi" and \'bye\' }` }'

    def test_escaped_brace_outside_string(self):
        """Test a backslash suppresses a brace outside quotes too."""
        assert extract_literal("X = { a: 1 \\} }", "X") == "{ a: 1 \\} }"

    def test_placeholder_syntax_in_strings(self):
        """Test template placeholder braces inside strings."""
        source = "X = { DEV: 'Use {{VAR:Lang:Python,JavaScript}}' };"
        assert extract_literal(source, "X") == "{ DEV: 'Use {{VAR:Lang:Python,JavaScript}}' }"

    def test_marker_inside_longer_identifier(self):
        """Test marker matched inside a longer name still finds the literal."""
        source = "var window_X_extra; window.X = { a: 'b' };"
        assert extract_literal(source, "X") == "{ a: 'b' }"

    def test_library_file_shape(self, library_source):
        """Test a realistic library file."""
        text = extract_literal(library_source, "window.ARCH_LIBRARY")

        assert text.startswith("{")
        assert text.endswith("}")
        assert '"BRACES": "Literal } and { inside a string",' in text
        assert "unrelated" not in text


class TestUnbalanced:
    """Test inputs whose braces never balance."""

    def test_unclosed_literal(self):
        """Test an unclosed nested literal fails instead of looping."""
        source = "X = { a: {"
        with pytest.raises(UnbalancedDelimitersError) as exc_info:
            extract_literal(source, "X")

        assert exc_info.value.depth == 2
        assert exc_info.value.offset == source.index("{")
        assert exc_info.value.quote_mode == QuoteMode.NONE

    def test_unterminated_string(self):
        """Test an unterminated string swallows the closing brace."""
        with pytest.raises(UnbalancedDelimitersError) as exc_info:
            extract_literal("X = { a: 'oops }", "X")

        assert exc_info.value.quote_mode == QuoteMode.SINGLE
        assert "single-quoted" in str(exc_info.value)

    def test_trailing_backslash(self):
        """Test input ending in a backslash."""
        with pytest.raises(UnbalancedDelimitersError):
            extract_literal("X = { a: 1 \\", "X")

    def test_doubled_quotes_not_an_escape(self):
        """Test that quote doubling is not treated as escaping."""
        # 'it''s' closes and reopens; the final quote leaves a string open
        with pytest.raises(UnbalancedDelimitersError):
            extract_literal("X = { a: 'it''s }", "X")
