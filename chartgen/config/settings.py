"""Application settings using Pydantic BaseSettings."""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chartgen.config.constants import Role

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Chartgen"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("allowed_roles")
    @classmethod
    def normalize_roles(cls, v: list[str]) -> list[str]:
        return [role.strip().lower() for role in v if role.strip()]

    @model_validator(mode="after")
    def validate_timeouts_positive(self) -> "Settings":
        for field_name in (
            "relevance_timeout",
            "plan_timeout",
            "execution_timeout",
            "auth_timeout",
        ):
            value = getattr(self, field_name)
            if value <= 0:
                raise ValueError(f"{field_name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def validate_preview_limit(self) -> "Settings":
        if self.preview_row_limit < 1:
            raise ValueError(f"preview_row_limit must be at least 1, got {self.preview_row_limit}")
        return self

    # Azure AI Foundry
    azure_ai_project_endpoint: str = ""

    # Anthropic
    anthropic_api_key: str | None = None

    # Relevance Agent
    relevance_agent_model: str = "claude-sonnet-4-5"
    relevance_temperature: float = 0.1
    relevance_max_tokens: int = 256

    # Plan Agent
    plan_agent_model: str = "claude-sonnet-4-5"
    plan_temperature: float = 0.1
    plan_max_tokens: int = 1024

    # Supabase (execution channel + auth)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"
    sql_rpc_function: str = "execute_raw_sql"
    sql_rpc_argument: str = "sql_query"
    profiles_table: str = "profiles"

    # Access policy
    allowed_roles: list[str] = [Role.STAFF.value, Role.ADMIN.value]

    # CORS
    allowed_origins: list[str] = ["*"]

    # Result shaping
    preview_row_limit: int = 50

    # Timeouts (seconds)
    relevance_timeout: float = 15.0
    plan_timeout: float = 60.0
    execution_timeout: float = 30.0
    auth_timeout: float = 10.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
