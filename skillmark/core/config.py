from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Service ---
    PROJECT_NAME: str = "SkillMark API"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # --- Storage ---
    ORDERS_CSV_PATH: str = "orders.csv"
    CSV_ENCODING: str = "utf-8"

    # --- Optional / Default Fields ---
    CORS_ORIGINS: list[str] = ["*"]
    ORDER_TIMEZONE: str = "UTC"  # Calendar year in order IDs is taken in this zone
    LOG_LEVEL: str = "INFO"
    MAX_BODY_BYTES: int = 100 * 1024  # Same 100kb cap as a default Express JSON parser

    # --- Configuration ---
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Unknown variables in .env are ignored
    )

settings = Settings()
