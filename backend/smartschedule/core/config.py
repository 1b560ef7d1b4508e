from functools import lru_cache
import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "SmartSchedule API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite+pysqlite:///./smartschedule.db"

    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    admin_user_id: str = "admin"
    admin_name: str = "Admin"
    admin_email: str = "admin@slrtce.in"
    admin_password: str = "admin123"
    teacher_email_domain: str = "@slrtce.in"

    generation_delay_seconds: float = 1.5
    seed_demo_data: bool = True

    auth_rate_limit_window_seconds: int = 300
    auth_rate_limit_login_max_requests: int = 12
    auth_rate_limit_register_max_requests: int = 8

    max_request_size_bytes: int = 1_000_000

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.startswith("["):
                try:
                    parsed = json.loads(stripped)
                    if isinstance(parsed, list):
                        return [str(item).strip() for item in parsed if str(item).strip()]
                except json.JSONDecodeError:
                    pass
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @field_validator("teacher_email_domain")
    @classmethod
    def normalize_email_domain(cls, value: str) -> str:
        domain = value.strip().lower()
        if domain and not domain.startswith("@"):
            domain = f"@{domain}"
        return domain


@lru_cache
def get_settings() -> Settings:
    return Settings()
