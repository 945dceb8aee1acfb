from functools import lru_cache
from typing import Literal
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    environment: Literal["development", "staging", "production"] = Field(
        default="development"
    )
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    database_url: str | None = Field(default=None, env="DATABASE_URL")
    db_pool_min: int = Field(default=0)
    db_pool_max: int = Field(default=20)
    db_pool_idle_timeout_seconds: int = Field(default=30)

    azure_sql_server: str | None = Field(default=None, env="AZURE_SQL_SERVER")
    azure_sql_database: str | None = Field(default=None, env="AZURE_SQL_DATABASE")
    azure_sql_user: str | None = Field(default=None, env="AZURE_SQL_USER")
    azure_sql_password: str | None = Field(default=None, env="AZURE_SQL_PASSWORD")

    jwt_secret: str = Field(..., env="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256")
    auth_token_expire_days: int = Field(default=7)
    auth_cookie_name: str = Field(default="auth_token")
    password_hash_rounds: int = Field(default=12)

    openai_api_key: str | None = Field(default=None, env="OPENAI_API_KEY")
    openai_api_key_secondary: str | None = Field(
        default=None, env="OPENAI_API_KEY_SECONDARY"
    )
    azure_openai_api_key: str | None = Field(default=None, env="AZURE_OPENAI_API_KEY")
    azure_openai_endpoint: str | None = Field(default=None, env="AZURE_OPENAI_ENDPOINT")
    azure_openai_deployment: str | None = Field(
        default=None, env="AZURE_OPENAI_DEPLOYMENT"
    )
    azure_openai_api_version: str | None = Field(
        default=None, env="AZURE_OPENAI_API_VERSION"
    )

    execution_assistant_id: str | None = Field(default=None, env="EXECUTION_ASSISTANT_ID")
    reflection_assistant_id: str | None = Field(
        default=None, env="REFLECTION_ASSISTANT_ID"
    )

    # Reported by the health check only.
    supabase_url: str | None = Field(
        default=None, validation_alias="NEXT_PUBLIC_SUPABASE_URL"
    )
    supabase_service_role_key: str | None = Field(
        default=None, validation_alias="SUPABASE_SERVICE_ROLE_KEY"
    )

    chat_model: str = Field(default="gpt-4o-mini")
    chat_max_tokens: int = Field(default=1000)
    chat_temperature: float = Field(default=0.7)
    chat_timeout_seconds: float = Field(default=30.0)
    chat_context_window: int = Field(default=20)
    image_model: str = Field(default="dall-e-3")

    assistant_poll_interval_seconds: float = Field(default=2.0)
    assistant_max_poll_attempts: int = Field(default=30)
    dual_assistant_poll_interval_seconds: float = Field(default=3.0)
    dual_assistant_max_poll_attempts: int = Field(default=20)

    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def azure_openai_configured(self) -> bool:
        return all(
            [
                self.azure_openai_api_key,
                self.azure_openai_endpoint,
                self.azure_openai_deployment,
                self.azure_openai_api_version,
            ]
        )

    @property
    def sqlalchemy_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        if self.azure_sql_server and self.azure_sql_database:
            user = quote_plus(self.azure_sql_user or "")
            password = quote_plus(self.azure_sql_password or "")
            return (
                f"mssql+pyodbc://{user}:{password}@{self.azure_sql_server}:1433/"
                f"{self.azure_sql_database}"
                "?driver=ODBC+Driver+18+for+SQL+Server&Encrypt=yes"
            )
        return "sqlite:///./athletic_balance.db"


@lru_cache
def get_settings() -> Settings:
    return Settings()
