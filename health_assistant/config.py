from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    database_url: str = "sqlite:///./health_assistant.db"
    log_level: str = "INFO"

    # "memory" keeps reports for the process lifetime, "database" persists them via SQLAlchemy.
    store_backend: str = "memory"
    reference_suggestion_threshold: int = 80
    allowed_origins: str = "http://localhost:3000"


settings = Settings()
