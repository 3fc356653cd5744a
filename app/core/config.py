"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(raw: str) -> set[str]:
    return {item.strip().strip("/") for item in raw.split(",") if item.strip()}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Storage
    COMMENTS_STORAGE_PATH: str = "blog-comments"

    # Comment policy
    COMMENT_SIZE_LIMIT: int = 1000
    COMMENT_REVIEW: bool = False

    # Page metadata
    COMMENTS_READONLY_PAGES: str = ""
    COMMENTS_DISABLED_PAGES: str = ""

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def readonly_pages(self) -> set[str]:
        """Page ids that show comments but accept no submissions."""
        return _split_csv(self.COMMENTS_READONLY_PAGES)

    @property
    def disabled_pages(self) -> set[str]:
        """Page ids that do not declare comments at all."""
        return _split_csv(self.COMMENTS_DISABLED_PAGES)


settings = Settings()
