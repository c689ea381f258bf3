"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./catalog.db"
    create_tables_on_startup: bool = True

    # Images
    image_storage_path: str = "product-images"

    # Pagination
    default_page_size: int = 5
    max_page_size: int = 100

    # Product codes
    code_prefix: str = "PRODUCT"
    code_width: int = 3
    code_allocation_attempts: int = 5

    # Localization
    default_locale: str = "en"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
