"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use LOLMARK_ prefix (e.g., LOLMARK_MINIFY_OUTPUT=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use LOLMARK_ prefix.

    Examples:
        LOLMARK_OUTPUT_FILENAME=page.html
        LOLMARK_LEGACY_VARIABLE_RESOLUTION=true
        LOLMARK_STRICT_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="LOLMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Input configuration
    source_encoding: str = Field(
        default="utf-8",
        description="Encoding used to read source files",
    )

    # Checking configuration
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: a document with an empty body is a syntax error",
    )

    # Generation configuration
    legacy_variable_resolution: bool = Field(
        default=False,
        description=(
            "Resolve every variable use to the most recently declared binding "
            "regardless of its name, and pop a single binding when a paragraph closes"
        ),
    )

    # Output configuration
    output_filename: str = Field(
        default="index.html",
        description="Name of the generated HTML file inside the output directory",
    )

    minify_output: bool = Field(
        default=False,
        description="Emit the generated HTML on a single line",
    )


# Singleton instance - import this in your code
appsettings = AppSettings()
