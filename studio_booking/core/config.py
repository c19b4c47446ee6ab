from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data"

    HOUR_START: int = 8
    HOUR_END: int = 20
    SUGGESTION_DAYS_AHEAD: int = 14
    SUGGESTION_STEP_MINUTES: int = 30
    SUGGESTION_LIMIT: int = 5

    PAYMENT_WEBHOOK_SECRET: str | None = None
    PAYMENT_SIGNATURE_TOLERANCE_SECONDS: int = 300

    CAL_COM_API_KEY: str | None = None
    CAL_COM_BASE_URL: str = "https://api.cal.com/v1"
    CAL_COM_TIMEOUT_SECONDS: float = 10.0

    RESEND_API_KEY: str | None = None
    RESEND_FROM_EMAIL: str = "Studio Booking <notifications@example.com>"
    RESEND_API_URL: str = "https://api.resend.com/emails"
    NOTIFY_TIMEOUT_SECONDS: float = 10.0
    DASHBOARD_URL: str = "http://localhost:3000/dashboard/calendar"


settings = Settings()
