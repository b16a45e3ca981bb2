import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    service_name: str = Field(default="zen-api-automator", alias="SERVICE_NAME")
    cors_allow_origins: str = Field(default="*", alias="CORS_ALLOW_ORIGINS")

    proxy_step_timeout_ms: int = Field(default=30000, alias="PROXY_STEP_TIMEOUT_MS")
    proxy_command_timeout_ms: int = Field(default=10000, alias="PROXY_COMMAND_TIMEOUT_MS")

    bot_caller_number: str = Field(default="+1234567890", alias="BOT_CALLER_NUMBER")
    bot_simulated_call_delay_seconds: float = Field(default=1.0, alias="BOT_SIMULATED_CALL_DELAY_SECONDS")
    bot_history_max_entries: int = Field(default=1000, alias="BOT_HISTORY_MAX_ENTRIES")

    supabase_url: str = Field(default="", alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(default="", alias="SUPABASE_SERVICE_ROLE_KEY")
    supabase_workflow_table: str = Field(default="automator_kv", alias="SUPABASE_WORKFLOW_TABLE")

    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=8000, alias="APP_PORT")
    app_timezone: str = Field(default="UTC", alias="APP_TIMEZONE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.log_level)
    return settings
