from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Files
    EXPORT_DIR: str = Field(default="/app/data/exports")

    # Business defaults
    DEFAULT_DUTY_DAYS: int = Field(default=14)
    DEFAULT_LOCATION: str = Field(default="GULFPORT")
    DEFAULT_UNIT_CODES: str = Field(default="SG,AE,CAB,A7")

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)
    DEMO_EXERCISE_NAME: str = Field(default="Demo Exercise")


settings = Settings()
