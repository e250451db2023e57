"""API configuration loaded from environment variables."""
from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """API configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug-level logging.
        log_json: Emit JSON log lines instead of console output.
        cors_origins_raw: Raw comma-separated CORS origins string.
        shutdown_timeout: Seconds to wait for graceful shutdown.
        upload_dir: Directory uploaded files are stored in.
        database_path: SQLite database file for user records.
        sse_queue_size: Maximum pending frames per SSE subscriber.
        sse_ping_interval: Seconds between SSE keep-alive pings.
    """

    model_config = SettingsConfigDict(
        env_prefix="FILECAST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    log_json: bool = True
    cors_origins_raw: str = "*"
    shutdown_timeout: float = 30.0

    upload_dir: str = "uploads"
    database_path: str = "data/filecast.db"

    sse_queue_size: int = 100
    sse_ping_interval: float = 15.0

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [
            origin.strip()
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
