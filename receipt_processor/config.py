from functools import lru_cache
from typing import Any, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application settings for the receipt processor service.

    Attributes:
        database_url (str): The URL for the database connection. Defaults to a
            local SQLite file accessed through aiosqlite.
        database_options (Optional[dict[str, Any]]): Extra driver arguments passed
            as `connect_args` when the engine is created.
        storage_timeout_seconds (float): Upper bound for a single store operation.
            Defaults to 10 seconds.
        host (str): Interface the HTTP server binds to.
        port (int): TCP port the HTTP server listens on. Defaults to 8080.
        disable_logfire (bool): Whether to disable Logfire instrumentation. Defaults to False.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow"
    )

    database_url: str = "sqlite+aiosqlite:///./receipts.db"
    database_options: Optional[dict[str, Any]] = None
    storage_timeout_seconds: float = 10.0
    host: str = "0.0.0.0"
    port: int = 8080
    disable_logfire: bool = False


@lru_cache
def get_app_settings() -> AppSettings:
    """Retrieves the application settings.

    This function is cached to ensure that `AppSettings` are loaded only once
    from environment variables.

    Returns:
        AppSettings: An instance of the application settings.
    """
    return AppSettings()
