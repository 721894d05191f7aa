from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://spacetravelling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_TIMEOUT: float = 10.0

    # Posts
    POSTS_DOCUMENT_TYPE: str = "posts"
    POSTS_PAGE_SIZE: int = 1
    PREVIOUS_POST_ORDERINGS: str = "[document.first_publication_date]"
    NEXT_POST_ORDERINGS: str = "[document.last_publication_date desc]"
    WORDS_PER_MINUTE: int = 200

    # Presentation
    SITE_NAME: str = "spacetravelling"
    DATE_LOCALE: str = "pt_br"
    DATE_TIMEZONE: str = "UTC"

    # Preview
    PREVIEW_COOKIE_NAME: str = "io.prismic.preview"

    # Static build
    BUILD_OUTPUT_DIR: str = "build"

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings
