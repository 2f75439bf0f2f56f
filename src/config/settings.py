"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use GQLDOCS_ prefix (e.g., GQLDOCS_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use GQLDOCS_ prefix.

    Examples:
        GQLDOCS_REQUEST_TIMEOUT=10
        GQLDOCS_STRICT_MODE=true
        GQLDOCS_PARTIAL_EXTENSION=.hbs
    """

    model_config = SettingsConfigDict(
        env_prefix="GQLDOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Introspection configuration
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for the introspection HTTP request",
    )

    # Description processing
    split_descriptions: bool = Field(
        default=True,
        description="Extract @directive annotations from schema descriptions",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: abort on malformed annotations instead of keeping the raw description",
    )

    # Rendering configuration
    internal_prefix: str = Field(
        default="__",
        description="Types whose name starts with this prefix get no page of their own",
    )

    partial_extension: str = Field(
        default=".html",
        description="File extension of partials; the partial name is the filename without it",
    )

    type_template: str = Field(
        default="Type.html",
        description="Template rendered once per schema type",
    )

    def partialName_extract(self, filename: str) -> Optional[str]:
        """
        Derive a partial's registered name from its filename.

        Args:
            filename: Filename inside the partials directory

        Returns:
            Partial name if the file has the partial extension, None otherwise

        Example:
            >>> settings = AppSettings()
            >>> settings.partialName_extract('TypeRef.html')
            'TypeRef'
            >>> settings.partialName_extract('notes.txt') is None
            True
        """
        if not filename.endswith(self.partial_extension):
            return None

        name = filename[: -len(self.partial_extension)]
        return name or None

    def typeInternal_is(self, type_name: str) -> bool:
        """Check whether a type is an introspection/internal type"""
        return type_name.startswith(self.internal_prefix)


# Singleton instance - import this in your code
appsettings = AppSettings()
