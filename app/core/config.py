from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    LEDGER_TIMEZONE: str = "Asia/Kolkata"
    SLOT_DURATION_MINUTES: int = 60
    DEFAULT_RANGE_DAYS: int = 14

    SLOT_RECHECK_ENABLED: bool = True
    SLOT_CHECK_MAX_WORKERS: int = 8

    GOOGLE_CALENDAR_ID: str | None = None
    GOOGLE_ACCESS_TOKEN: str | None = None
    GOOGLE_CALENDAR_BASE_URL: str = "https://www.googleapis.com/calendar/v3"
    CALENDAR_TIMEOUT_SECONDS: float = 10.0


settings = Settings()
