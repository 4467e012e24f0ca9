from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod
    LOG_LEVEL: str = Field(default="INFO")
    LOCAL_TZ: str = Field(default="Europe/Prague")

    # DB
    DATABASE_URL: str = Field(default="sqlite:///./data/solartrack.db")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Files
    EXPORT_DIR: str = Field(default="./data/exports")

    # Backup
    APP_NAME: str = Field(default="MST_SOLAR_TRACKER")
    BACKUP_SCHEMA_VERSION: int = Field(default=1)

    # Forecast
    FORECAST_WINDOW_DAYS: int = Field(default=7)
    FORECAST_MIN_VELOCITY: float = Field(default=0.1)

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)


settings = Settings()
