"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from labor_engine.domain.models import OvertimeRule


class Settings(BaseSettings):
    """Service configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="LABOR_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Service
    service_name: str = "labor-engine"
    log_level: str = "INFO"

    # Rule applied when a policy record does not name one
    overtime_rule: OvertimeRule = OvertimeRule.ROLLING_DURATION


settings = Settings()
