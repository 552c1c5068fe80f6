from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    service_name: str = "Lunaris Hacks"
    host: str = "0.0.0.0"
    port: int = 3000

    # Database connection parameters
    database_url: Optional[str] = None
    db_sslmode: Optional[str] = None
    db_pool_min: int = Field(1, ge=1)
    db_pool_max: int = Field(10, ge=1)
    db_conn_retries: int = 5
    db_conn_retry_delay: float = 2.0
    db_auto_migrate: bool = False

    # HTTP surface
    cors_allowed_origins: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    admin_api_token: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_request_payloads: bool = False

    # Email delivery
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_ssl: bool = False
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    submission_notification_from: str = "no-reply@lunarishacks.com"
    submission_notification_recipients: List[str] = []
    submission_notification_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
