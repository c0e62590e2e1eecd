from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", frozen=True, extra="ignore"
    )

    # required: startup fails if any of these is missing
    DATABASE_URL: str
    ADMIN_USERNAME: str
    ADMIN_PASSWORD: str
    ADMIN_TOKEN: str

    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5050
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False
    SQL_ECHO: bool = False

    @field_validator("DATABASE_URL", "ADMIN_USERNAME", "ADMIN_PASSWORD", "ADMIN_TOKEN")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


settings = Settings()
