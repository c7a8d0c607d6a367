"""Placeholder syntax definitions and patterns."""

import re
from typing import Pattern

# {{INPUT}} - replaced by literal substring replacement, never as a pattern
INPUT_MARKER = "{{INPUT}}"

# Render vars key that feeds {{INPUT}}
INPUT_VAR = "input"

# {{VAR:Name:Option1,Option2}} - name excludes ':' and '}', options exclude '}'
VARIABLE_PATTERN: Pattern = re.compile(r"\{\{VAR:([^:}]+):([^}]+)\}\}")

OPTION_SEPARATOR = ","

# Characters removed by String.prototype.trim: whitespace, Zs spaces, BOM and
# line terminators. Differs from str.strip(), which also drops \x1c-\x1f and \x85.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def split_options(raw_options: str) -> list[str]:
    """Split the options part of a VAR placeholder, keeping raw spacing."""
    return raw_options.split(OPTION_SEPARATOR)


def default_option(raw_options: str) -> str:
    """
    Return the default for a VAR placeholder.

    The default is the first option trimmed of surrounding whitespace;
    a first option that trims to nothing yields the empty string.
    """
    return split_options(raw_options)[0].strip(TRIM_CHARS)
