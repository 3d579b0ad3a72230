import os
from functools import lru_cache
from pathlib import Path

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from payroll_engine.models import PaymentFrequency

BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent


class Settings(BaseSettings):
    env: str = Field(default="dev", description="Deployment environment")
    app_name: str = "Payroll API"
    cors_origins: list[AnyHttpUrl] = []
    log_level: str = "INFO"
    sentry_dsn: str | None = Field(default=None, description="Sentry DSN for error monitoring")
    sentry_traces_sample_rate: float = 0.2
    release: str = Field(default="payroll-engine@0.1.0", description="Release tag reported with errors")
    otlp_endpoint: str | None = Field(default=None, description="OTLP endpoint for traces/metrics")
    created_by: str = Field(default="admin@example.com", description="Recorded as the author of new payroll runs")
    default_pay_frequency: PaymentFrequency = PaymentFrequency.BI_WEEKLY
    seed_demo_data: bool = Field(default=False, description="Load demo employees and runs at startup")
    page_limit: int = 25

    model_config = SettingsConfigDict(env_prefix="PAYROLL_", extra="ignore")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: str | list[AnyHttpUrl]) -> list[AnyHttpUrl]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin]
        return value


def get_settings_env_file() -> str | None:
    """Resolve environment-specific env file if it exists."""
    env = os.getenv("PAYROLL_ENV", "dev")
    env_file = BASE_DIR / f".env.{env}"
    default_file = BASE_DIR / ".env"
    if env_file.exists():
        return str(env_file)
    if default_file.exists():
        return str(default_file)
    return None


@lru_cache
def get_settings() -> Settings:
    return Settings(_env_file=get_settings_env_file())


settings = get_settings()
