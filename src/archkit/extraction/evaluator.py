"""Evaluate an extracted object literal into plain Python data.

This is a small recursive-descent parser for the data subset of
JavaScript object literals: objects, arrays, strings in all three quote
styles, numbers, ``true``/``false``/``null`` and ``+`` concatenation of
strings. It never executes code, so anything that would need a runtime
(identifiers, calls, template interpolation under the strict policy) is
an error rather than a guess.
"""

import logging
import re
from typing import Any, Optional, Union

from .models import EvaluationError, InterpolationPolicy

logger = logging.getLogger(__name__)

MAX_NESTING_DEPTH = 200

KEYWORDS: dict[str, Any] = {"true": True, "false": False, "null": None}

SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}

OCTAL_DIGITS = "01234567"

LINE_TERMINATORS = ("\n", "\r", "\u2028", "\u2029")

NUMBER_PATTERN = re.compile(
    r"[+-]?(?:0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def _is_identifier_start(ch: str) -> bool:
    return bool(ch) and (ch.isalpha() or ch in "_$")


def _is_identifier_part(ch: str) -> bool:
    return bool(ch) and (ch.isalnum() or ch in "_$")


def _type_name(value: Any) -> str:
    """Name a parsed value the way the source language would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "string"


class _Parser:
    """Cursor over a single literal. One instance per evaluation."""

    def __init__(self, text: str, interpolation: InterpolationPolicy):
        self.text = text
        self.pos = 0
        self.depth = 0
        self.interpolation = interpolation

    # Helpers

    def error(self, reason: str, offset: Optional[int] = None) -> EvaluationError:
        return EvaluationError(reason, offset=self.pos if offset is None else offset)

    def peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.text[index] if index < len(self.text) else ""

    def expect(self, ch: str):
        if self.peek() != ch:
            found = repr(self.peek()) if self.peek() else "end of input"
            raise self.error(f"Expected '{ch}' but found {found}")
        self.pos += 1

    def skip_whitespace(self):
        """Skip whitespace, // line comments and /* block */ comments."""
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch.isspace() or ch == "\ufeff":
                self.pos += 1
            elif ch == "/" and self.peek(1) == "/":
                end = self.text.find("\n", self.pos)
                self.pos = len(self.text) if end == -1 else end + 1
            elif ch == "/" and self.peek(1) == "*":
                end = self.text.find("*/", self.pos + 2)
                if end == -1:
                    raise self.error("Unterminated block comment")
                self.pos = end + 2
            else:
                break

    def enter(self):
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise self.error(f"Literal is nested deeper than {MAX_NESTING_DEPTH} levels")

    def leave(self):
        self.depth -= 1

    # Grammar

    def parse(self) -> Any:
        value = self.expression()
        self.skip_whitespace()
        if self.pos != len(self.text):
            raise self.error(f"Unexpected trailing content {self.text[self.pos:self.pos + 20]!r}")
        return value

    def expression(self) -> Any:
        """expression := primary ('+' primary)*  (strings only)"""
        start = self.pos
        value = self.primary()
        while True:
            self.skip_whitespace()
            if self.peek() != "+":
                if isinstance(value, str):
                    return self.pair_surrogates(value, start)
                return value
            self.pos += 1
            rhs = self.primary()
            if not isinstance(value, str) or not isinstance(rhs, str):
                raise self.error(
                    f"'+' is only supported between strings, "
                    f"got {_type_name(value)} + {_type_name(rhs)}",
                    offset=start,
                )
            value += rhs

    def primary(self) -> Any:
        self.skip_whitespace()
        ch = self.peek()
        if not ch:
            raise self.error("Unexpected end of input")
        if ch == "{":
            return self.object()
        if ch == "[":
            return self.array()
        if ch in ("'", '"'):
            return self.string(ch)
        if ch == "`":
            return self.template()
        if ch == "(":
            self.pos += 1
            self.enter()
            value = self.expression()
            self.skip_whitespace()
            self.expect(")")
            self.leave()
            return value
        if ch.isdigit() or ch in "+-.":
            return self.number()
        if _is_identifier_start(ch):
            start = self.pos
            name = self.identifier()
            if name in KEYWORDS:
                return KEYWORDS[name]
            raise self.error(f"Reference to undefined symbol '{name}'", offset=start)
        raise self.error(f"Unexpected character {ch!r}")

    def object(self) -> dict[str, Any]:
        self.expect("{")
        self.enter()
        result: dict[str, Any] = {}
        while True:
            self.skip_whitespace()
            if self.peek() == "}":
                self.pos += 1
                self.leave()
                return result

            key_start = self.pos
            key, bare = self.key()
            self.skip_whitespace()
            if bare and self.peek() in (",", "}", "("):
                raise self.error(
                    f"Property '{key}' has no value; shorthand properties and "
                    f"methods are not supported",
                    offset=key_start,
                )
            self.expect(":")

            value = self.expression()
            if key in result:
                logger.warning(f"Duplicate key '{key}' at offset {key_start}; last value wins")
            result[key] = value

            self.skip_whitespace()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                found = repr(self.peek()) if self.peek() else "end of input"
                raise self.error(f"Expected ',' or '}}' in object but found {found}")

    def key(self) -> tuple[str, bool]:
        """Parse a property key. Returns (key, was_bare_identifier)."""
        ch = self.peek()
        if ch in ("'", '"'):
            start = self.pos
            return self.pair_surrogates(self.string(ch), start), False
        if ch == "`":
            raise self.error("Template literals cannot be used as property keys")
        if ch == "[":
            raise self.error("Computed property keys are not supported")
        if self.text.startswith("...", self.pos):
            raise self.error("Spread syntax is not supported")
        if ch.isdigit() or ch == ".":
            number = self.number()
            return self.format_number_key(number), False
        if _is_identifier_start(ch):
            return self.identifier(), True
        if not ch:
            raise self.error("Unexpected end of input in object")
        raise self.error(f"Unexpected character {ch!r} where a property key was expected")

    def array(self) -> list[Any]:
        self.expect("[")
        self.enter()
        items: list[Any] = []
        while True:
            self.skip_whitespace()
            if self.peek() == "]":
                self.pos += 1
                self.leave()
                return items
            if self.peek() == ",":
                raise self.error("Array holes are not supported")
            items.append(self.expression())
            self.skip_whitespace()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                found = repr(self.peek()) if self.peek() else "end of input"
                raise self.error(f"Expected ',' or ']' in array but found {found}")

    def identifier(self) -> str:
        start = self.pos
        self.pos += 1
        while self.pos < len(self.text) and _is_identifier_part(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def number(self) -> Union[int, float]:
        match = NUMBER_PATTERN.match(self.text, self.pos)
        if not match:
            raise self.error(f"Invalid number starting with {self.peek()!r}")
        raw = match.group(0)
        self.pos = match.end()
        if _is_identifier_part(self.peek()):
            raise self.error(f"Identifier directly after number '{raw}'")

        sign = -1 if raw.startswith("-") else 1
        digits = raw.lstrip("+-")
        prefix = digits[:2].lower()
        if prefix == "0x":
            return sign * int(digits, 16)
        if prefix == "0o":
            return sign * int(digits[2:], 8)
        if prefix == "0b":
            return sign * int(digits[2:], 2)
        if any(c in digits for c in ".eE"):
            return sign * float(digits)
        return sign * int(digits)

    @staticmethod
    def format_number_key(number: Union[int, float]) -> str:
        if isinstance(number, float) and number.is_integer():
            return str(int(number))
        return str(number)

    def escape(self, in_template: bool = False) -> str:
        """Decode the escape sequence after a backslash (already consumed)."""
        ch = self.peek()
        if not ch:
            raise self.error("Unterminated escape sequence")
        self.pos += 1

        if ch in SIMPLE_ESCAPES:
            return SIMPLE_ESCAPES[ch]
        if ch in OCTAL_DIGITS:
            return self.octal_escape(ch, in_template)
        if ch == "\r":
            if self.peek() == "\n":
                self.pos += 1
            return ""
        if ch in LINE_TERMINATORS:
            return ""
        if ch == "x":
            return chr(self.hex_digits(2))
        if ch == "u":
            if self.peek() == "{":
                end = self.text.find("}", self.pos)
                if end == -1:
                    raise self.error("Unterminated \\u{...} escape")
                digits = self.text[self.pos + 1:end]
                try:
                    code_point = int(digits, 16)
                    result = chr(code_point)
                except ValueError:
                    raise self.error(f"Invalid code point escape \\u{{{digits}}}") from None
                self.pos = end + 1
                return result
            return chr(self.hex_digits(4))
        return ch

    def hex_digits(self, count: int) -> int:
        digits = self.text[self.pos:self.pos + count]
        if len(digits) != count or any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise self.error(f"Invalid hexadecimal escape {digits!r}")
        self.pos += count
        return int(digits, 16)

    def octal_escape(self, first: str, in_template: bool) -> str:
        """Decode a legacy octal escape. A lone \\0 is NUL in every literal."""
        if first == "0" and not (self.peek() and self.peek() in "0123456789"):
            return "\0"
        if in_template:
            raise self.error("Octal escape sequences are not allowed in template literals")
        digits = first
        max_length = 3 if first in "0123" else 2
        while len(digits) < max_length and self.peek() and self.peek() in OCTAL_DIGITS:
            digits += self.peek()
            self.pos += 1
        return chr(int(digits, 8))

    def pair_surrogates(self, text: str, start: int) -> str:
        """Combine UTF-16 surrogate pairs written as separate \\u escapes."""
        if not any("\ud800" <= ch <= "\udfff" for ch in text):
            return text
        try:
            return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
        except UnicodeDecodeError:
            raise self.error("Unpaired surrogate escape in string", offset=start) from None

    def string(self, quote: str) -> str:
        start = self.pos
        self.expect(quote)
        parts: list[str] = []
        while True:
            ch = self.peek()
            if not ch or ch in ("\n", "\r"):
                raise self.error("Unterminated string literal", offset=start)
            self.pos += 1
            if ch == quote:
                return "".join(parts)
            if ch == "\\":
                parts.append(self.escape())
            else:
                parts.append(ch)

    def template(self) -> str:
        start = self.pos
        self.expect("`")
        parts: list[str] = []
        while True:
            ch = self.peek()
            if not ch:
                raise self.error("Unterminated template literal", offset=start)
            self.pos += 1
            if ch == "`":
                return "".join(parts)
            if ch == "\\":
                parts.append(self.escape(in_template=True))
            elif ch == "\r":
                if self.peek() == "\n":
                    self.pos += 1
                parts.append("\n")
            elif ch == "$" and self.peek() == "{":
                parts.append(self.interpolation_text(self.pos - 1))
            else:
                parts.append(ch)

    def interpolation_text(self, start: int) -> str:
        """Handle a `${...}` span starting at ``start`` according to the policy."""
        end = self.interpolation_end(start + 2)
        raw = self.text[start:end]
        if self.interpolation == InterpolationPolicy.STRICT:
            raise self.error(
                f"Template interpolation {raw!r} cannot be statically resolved",
                offset=start,
            )
        logger.debug(f"Keeping template interpolation {raw!r} as literal text")
        self.pos = end
        return raw

    def interpolation_end(self, pos: int) -> int:
        """Return the offset just past the '}' closing an interpolation."""
        depth = 1
        quote = ""
        escaped = False
        while pos < len(self.text):
            ch = self.text[pos]
            pos += 1
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif quote:
                if ch == quote:
                    quote = ""
            elif ch in ("'", '"', "`"):
                quote = ch
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pos
        raise self.error("Unterminated template interpolation")


class LiteralEvaluator:
    """Turn extracted literal text into a template mapping."""

    def __init__(
        self,
        interpolation: Union[InterpolationPolicy, str] = InterpolationPolicy.STRICT,
    ):
        self.interpolation = InterpolationPolicy(interpolation)

    def parse_value(self, literal_text: str) -> Any:
        """
        Parse literal text into Python data without restricting its shape.

        Raises:
            EvaluationError: If the text is not a statically evaluable literal
        """
        return _Parser(literal_text, self.interpolation).parse()

    def evaluate(self, literal_text: str) -> dict[str, str]:
        """
        Evaluate literal text into a mapping of template key to template body.

        Args:
            literal_text: Object literal text as returned by the extractor

        Returns:
            Dict of template key to template string

        Raises:
            EvaluationError: If parsing fails, the literal is not an object,
                or any value is not a string
        """
        value = self.parse_value(literal_text)
        if not isinstance(value, dict):
            raise EvaluationError(f"Top-level value is {_type_name(value)}, expected an object")

        for key, body in value.items():
            if not isinstance(body, str):
                raise EvaluationError(
                    f"Template '{key}' has a {_type_name(body)} value, expected a string"
                )

        logger.info(f"Evaluated literal into {len(value)} templates")
        return value


def evaluate(
    literal_text: str,
    interpolation: Union[InterpolationPolicy, str] = InterpolationPolicy.STRICT,
) -> dict[str, str]:
    """Evaluate literal text into a template mapping."""
    return LiteralEvaluator(interpolation).evaluate(literal_text)
