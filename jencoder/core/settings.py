"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

DB_URL_DEFAULT = "sqlite+aiosqlite:///./jencoder.db"
LOG_LEVEL_DEFAULT = "INFO"
DEFAULT_ALGORITHM = "HS256"


class DatabaseSettings(BaseSettings):
    """Connection settings for the persisted-configuration store."""

    model_config = SettingsConfigDict(env_prefix="JENCODER_DB_")

    url: str = DB_URL_DEFAULT
    echo: bool = False


class AppSettings(BaseSettings):
    """Web application settings."""

    model_config = SettingsConfigDict(env_prefix="JENCODER_")

    cors_origins: str = ""
    config_encryption_key: str = ""
    log_level: str = LOG_LEVEL_DEFAULT
    default_algorithm: str = DEFAULT_ALGORITHM

    def get_cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        if not self.cors_origins:
            return []
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
