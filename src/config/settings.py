"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use HGREP_ prefix (e.g., HGREP_PARSER=lxml).

Settings can also be loaded from a .env file in the working directory.
"""

from typing import Literal, TextIO

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use HGREP_ prefix.

    Examples:
        HGREP_PARSER=lxml
        HGREP_ENCODING=latin-1
        HGREP_COLOR=never
    """

    model_config = SettingsConfigDict(
        env_prefix="HGREP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Document loading
    parser: str = Field(
        default="html.parser",
        description="BeautifulSoup tree builder used to parse sources (html.parser, lxml, html5lib)",
    )

    encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode input sources; undecodable sources are skipped",
    )

    # Output configuration
    color: Literal["auto", "always", "never"] = Field(
        default="auto",
        description="Colorize the source prefix: auto (only on a terminal), always, never",
    )

    prefix_color: str = Field(
        default="\x1b[35m",
        description="ANSI escape opening a colorized source prefix (magenta)",
    )

    color_reset: str = Field(
        default="\x1b[0m",
        description="ANSI escape closing a colorized source prefix",
    )

    def color_use(self, out: TextIO) -> bool:
        """
        Decide whether prefixes written to `out` should be colorized.

        Args:
            out: Destination stream

        Returns:
            True for "always", False for "never", and for "auto" whether
            the destination is an interactive terminal.
        """
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        isatty = getattr(out, "isatty", None)
        return bool(isatty and isatty())


# Singleton instance - import this in your code
appsettings = AppSettings()
