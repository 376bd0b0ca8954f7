from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite:///appforge.db"
    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7
    log_level: str = "INFO"
    slug_max_attempts: int = 50
    slug_fallback: str = "project"
    deployment_domain: str = "vercel.app"
    host: str = "127.0.0.1"
    port: int = 8000

    class Config:
        env_prefix = "APPFORGE_"


settings = Settings()
