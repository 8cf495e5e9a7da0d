"""
Settings tests

Tests defaults and LOLMARK_ environment variable overrides.
"""

from lolmark.config import AppSettings


class TestAppSettings:
    """Test pydantic-settings configuration"""

    def test_defaults(self, monkeypatch):
        for name in ("LOLMARK_OUTPUT_FILENAME", "LOLMARK_MINIFY_OUTPUT",
                     "LOLMARK_LEGACY_VARIABLE_RESOLUTION", "LOLMARK_STRICT_MODE"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings(_env_file=None)

        assert settings.output_filename == "index.html"
        assert settings.source_encoding == "utf-8"
        assert settings.minify_output is False
        assert settings.legacy_variable_resolution is False
        assert settings.strict_mode is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("LOLMARK_OUTPUT_FILENAME", "page.html")
        monkeypatch.setenv("LOLMARK_LEGACY_VARIABLE_RESOLUTION", "true")
        monkeypatch.setenv("lolmark_minify_output", "1")
        settings = AppSettings(_env_file=None)

        assert settings.output_filename == "page.html"
        assert settings.legacy_variable_resolution is True
        assert settings.minify_output is True
