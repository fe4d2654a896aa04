from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_NAME: str = "SLN Gardens"
    OWNER_NAME: str = "Srinivas Devunipally"
    BUSINESS_TIMEZONE: str = "Asia/Kolkata"

    # "memory" | "json" | "firebase"; empty picks json for dev/local, memory otherwise
    STORE_PROVIDER: str = ""
    BOOKINGS_PATH: str = "bookings"
    JSON_STORE_PATH: str = "./data/bookings.json"

    FIREBASE_DATABASE_URL: str | None = None
    FIREBASE_CREDENTIALS_PATH: str | None = None
    FIREBASE_PROJECT_ID: str | None = None


settings = Settings()
