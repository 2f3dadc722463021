"""
Application settings.

Every value can be overridden through a TEXT2TABLE_-prefixed environment
variable or a .env file in the working directory, e.g.
TEXT2TABLE_LOG_LEVEL=DEBUG or TEXT2TABLE_DEFAULT_DELIMITERS='["space","comma"]'.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from .delimiters import Delimiter
from .models import OutputFormat
from .rules import DEFAULT_TABLE_NAME


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TEXT2TABLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "text2table"
    VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

    # Conversion defaults
    DEFAULT_DELIMITERS: List[Delimiter] = [Delimiter.SPACE]
    DEFAULT_OUTPUT: OutputFormat = OutputFormat.CSV
    SQL_TABLE_NAME: str = DEFAULT_TABLE_NAME

    # HTTP service
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024


settings = Settings()
