# geoharvest\shared\config.py
from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class LogFormat(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class Settings(BaseSettings):
    """
    Central Configuration Registry.
    Strictly typed and validated via Pydantic.
    """

    # --- Application Meta ---
    APP_NAME: str = "geoharvest"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT

    # --- Logging & Observability ---
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.CONSOLE
    # Print finished spans to stderr (noisy, for debugging)
    TRACE_EXPORT: bool = False

    # --- External Services ---
    # Overpass answers country-wide queries slowly; the timeout is per request.
    OVERPASS_URL: str = "http://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT: int = 180
    OVERPASS_MAX_ATTEMPTS: int = 3
    OVERPASS_BACKOFF_MAX: float = 30.0
    USER_AGENT: str = "geoharvest/1.0 (administrative geography harvester)"

    # --- Worker Configuration ---
    # Number of countries fetched in parallel. 1 keeps the run fully sequential.
    WORKER_CONCURRENCY: int = 1

    # --- Persistence ---
    OUTPUT_DIR: str = "."

    # Optional JSON overrides for the built-in reference tables
    COUNTRIES_FILE: Optional[str] = None
    LANGUAGE_MAP_FILE: Optional[str] = None

    # --- Spreadsheet ---
    TRANSLATE_FUNCTION: str = "GOOGLETRANSLATE"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
