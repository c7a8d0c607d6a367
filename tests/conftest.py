"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from unittest.mock import Mock

import pytest

from archkit.llm import LLMClient, LLMResponse
from archkit.templates import TemplateStore


LIBRARY_SOURCE = """// Prompt library
const VERSION = "1.2";

window.ARCH_LIBRARY = {
  DEV: "Use {{VAR:Lang:Python,JavaScript}} to solve: {{INPUT}}",
  'DOC_GEN': 'Write docs for {{INPUT}} in a {{VAR:Tone: formal ,casual}} tone',
  REVIEW: `Review: {{INPUT}}
Focus on {{VAR:Focus:security,performance}}.`,
  "BRACES": "Literal } and { inside a string",
};

function unrelated() { return { a: 1 }; }
"""

SAMPLE_TEMPLATES = {
    "DEV": "Use {{VAR:Lang:Python,JavaScript}}",
    "REVIEW": "Review: {{INPUT}}",
    "MIXED": "{{VAR:Role: Senior engineer ,Junior}} reviews {{INPUT}} twice: {{INPUT}}",
    "EMPTY_DEFAULT": "Prefix{{VAR:Suffix: ,x}}End",
    "MALFORMED": "Keep {{VAR:NoOptions}} and {{UNKNOWN}} and {{VAR:Bad:opt",
    "BLANK": "",
}


@pytest.fixture
def library_source() -> str:
    """Source text of a template library file."""
    return LIBRARY_SOURCE


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    """Write the template library to a temporary .js file."""
    path = tmp_path / "library.js"
    path.write_text(LIBRARY_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def templates_file(tmp_path: Path) -> Path:
    """Write a persisted template mapping to a temporary JSON file."""
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(SAMPLE_TEMPLATES, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def store(templates_file: Path) -> TemplateStore:
    """Create a store over the sample templates."""
    return TemplateStore(templates_file)


@pytest.fixture
def mock_llm_client() -> Mock:
    """Create a mocked LLM client."""
    client = Mock(spec=LLMClient)
    client.generate = Mock(
        return_value=LLMResponse(
            text="Test response from the model",
            model="test-model",
            stop_reason="end_turn",
            usage={"input_tokens": 100, "output_tokens": 50},
        )
    )
    return client
