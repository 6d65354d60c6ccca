"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use PRINTDOWN_ prefix (e.g., PRINTDOWN_FILE_MAX_PASSES=4).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use PRINTDOWN_ prefix.

    Examples:
        PRINTDOWN_INLINE_MAX_PASSES=8
        PRINTDOWN_DEFAULT_THEME=default
        PRINTDOWN_DEFAULT_THEME_COLOR=336699
    """

    model_config = SettingsConfigDict(
        env_prefix="PRINTDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Token substitution
    file_max_passes: int = Field(
        default=3,
        description="Pass ceiling for token substitution in file-sourced markdown",
    )

    inline_max_passes: int = Field(
        default=5,
        description="Pass ceiling for token substitution in inline (HTML) content",
    )

    # Special content markers
    printonly_start: str = Field(
        default="PRINTONLY_START_",
        description="Start sentinel wrapping the index of an extracted print-only block",
    )

    printonly_end: str = Field(
        default="_PRINTONLY_END",
        description="End sentinel wrapping the index of an extracted print-only block",
    )

    page_break_html: str = Field(
        default='<div class="page-break"></div>',
        description="Element emitted for a forced page break",
    )

    shield_marker_class: str = Field(
        default="shield-marker",
        description="Class of the transient element marking a shielded paragraph",
    )

    # Styling defaults
    default_theme: str = Field(
        default="default",
        description="Theme used when none is given on the command line",
    )

    default_theme_color: str = Field(
        default="808",
        description="Theme color used when neither document nor CLI sets one",
    )

    default_page_number_format: str = Field(
        default="X of Y",
        description="Page number format used when the document does not set one",
    )

    def placeHolder_make(self, index: int) -> str:
        """
        Generate the sentinel pair for a print-only block at given index.

        Args:
            index: Zero-based index of the print-only block

        Returns:
            Sentinel string (e.g., "PRINTONLY_START_0_PRINTONLY_END")

        Example:
            >>> settings = AppSettings()
            >>> settings.placeHolder_make(0)
            'PRINTONLY_START_0_PRINTONLY_END'
        """
        return f"{self.printonly_start}{index}{self.printonly_end}"

    def blockIndex_extract(self, placeholder: str) -> int | None:
        """
        Extract print-only block index from a sentinel string.

        Args:
            placeholder: Sentinel string to parse

        Returns:
            Block index if valid sentinel, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.blockIndex_extract('PRINTONLY_START_3_PRINTONLY_END')
            3
        """
        if not placeholder.startswith(self.printonly_start):
            return None
        if not placeholder.endswith(self.printonly_end):
            return None

        content = placeholder[len(self.printonly_start) : -len(self.printonly_end)]

        try:
            return int(content)
        except ValueError:
            return None


# Singleton instance - import this in your code
appsettings = AppSettings()
