"""Render templates by substituting {{INPUT}} and {{VAR:...}} placeholders."""

import logging
import re
from typing import Any, Mapping, Optional

from .store import TemplateStore
from .syntax import INPUT_MARKER, INPUT_VAR, VARIABLE_PATTERN, default_option

logger = logging.getLogger(__name__)


def render_text(raw: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """
    Substitute placeholders in a template body.

    ``{{INPUT}}`` is replaced only when ``variables`` has an ``input`` entry,
    by plain substring replacement. Each ``{{VAR:Name:Opt1,Opt2}}`` becomes
    ``variables[Name]`` when present, else its first option trimmed.
    Anything that does not match either form is left untouched.
    """
    variables = variables or {}
    out = str(raw)

    if INPUT_VAR in variables:
        out = out.replace(INPUT_MARKER, str(variables[INPUT_VAR]))

    def replace_variable(match: re.Match) -> str:
        name, options = match.group(1), match.group(2)
        if name in variables:
            return str(variables[name])
        return default_option(options)

    return VARIABLE_PATTERN.sub(replace_variable, out)


class TemplateRenderer:
    """Render named templates from a TemplateStore."""

    def __init__(self, store: TemplateStore):
        self.store = store

    def render(self, key: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render the template stored under ``key``.

        Args:
            key: Template key
            variables: Values for {{INPUT}} (under "input") and VAR names

        Returns:
            The fully substituted text

        Raises:
            TemplateNotFoundError: If the key is not in the store
        """
        raw = self.store.get(key)
        rendered = render_text(raw, variables)
        logger.debug(f"Rendered template '{key}' ({len(rendered)} chars)")
        return rendered
