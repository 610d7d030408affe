"""Configuration management for fsmeta-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Diagnostic settings with environment variable support.

    Nothing here changes what ``classify`` or ``scan`` return; the values only
    control how much the tools log and whether spans are exported.
    """

    log_level: str = "WARNING"
    otel_enabled: bool = False
    otel_service_name: str = "fsmeta-tools"

    model_config = {
        "env_prefix": "FSMETA_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
