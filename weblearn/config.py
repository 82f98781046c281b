"""Configuration settings using pydantic-settings."""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    BOT_TOKEN: str = Field(default="", description="Telegram Bot API token")

    # Database
    DATABASE_PATH: str = Field(
        default="data/weblearn.db",
        description="Path to SQLite database file"
    )

    # Playground
    PREVIEW_FILENAME: str = Field(
        default="preview.html",
        description="File name used when sending a composed preview document"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOG_FILE: str = Field(
        default="",
        description="Optional path to log file (empty = stdout only)"
    )

    class Config:
        """Pydantic config."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()

CATEGORIES = ("html", "css", "javascript")

CATEGORY_TITLES = {
    "html": "HTML",
    "css": "CSS",
    "javascript": "JavaScript",
}

# Categories whose latest score is below this are reported as weak
WEAK_SCORE_THRESHOLD = 70

SEARCH_MIN_QUERY = 2

HISTORY_LIMIT = 10
