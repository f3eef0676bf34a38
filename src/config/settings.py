"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STAV_ prefix (e.g., STAV_DEFAULT_TITLE="My Page").

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STAV_ prefix.

    Examples:
        STAV_DEFAULT_TITLE=Untitled
        STAV_DEFAULT_THEME=dark
        STAV_THEME_DIR=styles
    """

    model_config = SettingsConfigDict(
        env_prefix="STAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Document skeleton
    default_title: str = Field(
        default="Untitled",
        description="Document title used when the program never runs `title`",
    )

    default_theme: str = Field(
        default="none",
        description="Stylesheet name used when the program never runs `theme`",
    )

    theme_dir: str = Field(
        default="theme",
        description="Directory (relative to the output file) holding theme stylesheets",
    )

    # Output configuration
    output_extension: str = Field(
        default=".html",
        description="Extension given to the generated document",
    )

    def stylesheet_href(self, theme: str) -> str:
        """
        Build the stylesheet href for a theme name.

        Example:
            >>> AppSettings().stylesheet_href("dark")
            'theme/dark.css'
        """
        return f"{self.theme_dir}/{theme}.css"

    def outputPath_make(self, source_path: Path) -> Path:
        """
        Derive the output path for a source file.

        The source extension, if any, is replaced; a path without one
        gains the output extension.

        Example:
            >>> AppSettings().outputPath_make(Path("site/index.stav"))
            PosixPath('site/index.html')
        """
        return source_path.with_suffix(self.output_extension)


# Singleton instance - import this in your code
appsettings = AppSettings()
