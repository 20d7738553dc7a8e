from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    redis_timeout_seconds: float = 0.5

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "task-manager-api"
    jwt_audience: str = "task-manager-api"
    jwt_expires_minutes: int = 60 * 24 * 7

    cors_origins: list[str] = ["http://localhost:3000"]

    # listing
    default_page_size: int = 10
    max_page_size: int = 100
    # keeps (page - 1) * limit well inside a 64-bit offset
    max_page: int = 1_000_000

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_api_per_window: int = 200
    rate_limit_api_window_seconds: int = 15 * 60
    rate_limit_auth_per_min: int = 20

settings = Settings()
