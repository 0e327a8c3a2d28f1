from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "taskmaster-api"
    jwt_audience: str = "taskmaster-api"
    # one day
    jwt_expires_minutes: int = 1440

    password_hash_iterations: int = 260_000

    history_default_limit: int = 20
    history_max_limit: int = 100

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_auth_login_per_min: int = 20
    rate_limit_auth_register_per_min: int = 10

settings = Settings()
