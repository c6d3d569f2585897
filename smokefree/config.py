from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/smokefree"
    default_tz: str = "UTC"  # "today" for requests that don't pass one
    api_key: str | None = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_prefix": "SMOKEFREE_", "extra": "ignore"}


settings = Settings()
