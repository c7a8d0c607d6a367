"""Tests for the config module."""

from pathlib import Path

from archkit.config import Settings, _parse_interpolation_policy


class TestParseInterpolationPolicy:
    """Test interpolation policy parsing."""

    def test_default_is_strict(self, monkeypatch):
        """Test the default policy when unset."""
        monkeypatch.delenv("ARCHKIT_INTERPOLATION", raising=False)
        assert _parse_interpolation_policy() == "strict"

    def test_literal(self, monkeypatch):
        """Test the literal policy, case-insensitively."""
        monkeypatch.setenv("ARCHKIT_INTERPOLATION", " Literal ")
        assert _parse_interpolation_policy() == "literal"

    def test_unknown_falls_back_to_strict(self, monkeypatch):
        """Test an unknown value is treated as strict."""
        monkeypatch.setenv("ARCHKIT_INTERPOLATION", "lenient")
        assert _parse_interpolation_policy() == "strict"


class TestSettings:
    """Test Settings configuration."""

    def test_settings_defaults(self):
        """Test defaults for fields not overridden."""
        settings = Settings(
            templates_path=Path("data/templates.json"),
            source_marker="window.ARCH_LIBRARY",
            llm_provider="none",
        )

        assert settings.templates_path == Path("data/templates.json")
        assert settings.source_marker == "window.ARCH_LIBRARY"
        assert settings.llm_provider == "none"
        assert settings.interpolation in ("strict", "literal")
        assert isinstance(settings.max_tokens, int)

    def test_settings_explicit_values(self, tmp_path):
        """Test Settings with explicit parameters."""
        settings = Settings(
            templates_path=tmp_path / "t.json",
            source_marker="LIB",
            source_encoding="latin-1",
            interpolation="literal",
            default_template="DOC_GEN",
            llm_provider="openrouter",
            openrouter_api_key="sk-or-test",
            openrouter_model="google/gemini-flash",
            max_tokens=1024,
            debug=True,
        )

        assert settings.templates_path == tmp_path / "t.json"
        assert settings.source_marker == "LIB"
        assert settings.source_encoding == "latin-1"
        assert settings.interpolation == "literal"
        assert settings.default_template == "DOC_GEN"
        assert settings.openrouter_api_key == "sk-or-test"
        assert settings.openrouter_model == "google/gemini-flash"
        assert settings.max_tokens == 1024
        assert settings.debug is True

    def test_path_coercion(self):
        """Test string paths become Path objects."""
        settings = Settings(templates_path="out/templates.json")

        assert isinstance(settings.templates_path, Path)
