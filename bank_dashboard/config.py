"""Configuration management using Pydantic Settings"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Upstream bank API
    bank_api_base_url: str = "http://localhost:8001"
    bank_api_key: str = ""
    account_id: str = "999"

    # Durable local state (rolling log buffer)
    database_url: str = "sqlite:///./bank_dashboard.db"
    log_store_key: str = "sys_logs"
    log_store_capacity: int = 50

    # Service
    service_name: str = "bank-dashboard"
    log_level: str = "INFO"

    # HTTP Client (None disables the timeout)
    http_timeout_seconds: Optional[float] = None


settings = Settings()
