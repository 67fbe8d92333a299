from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    api_enabled: bool = True
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    cors_origins: List[str] = ["*"]
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FOCUS_",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()
