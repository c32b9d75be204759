import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    APP_HOST: str = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT: int = int(os.getenv("APP_PORT", "8000"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change_me_very_long")
    ACCESS_TOKEN_EXPIRES_MIN: int = int(os.getenv("ACCESS_TOKEN_EXPIRES_MIN", "1440"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS stuff; storefront calls come from shop domains
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = [o.strip() for o in _origins_raw.split(",") if o.strip()] if _origins_raw else ["*"]

    # database config with separate creds
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "delivery_eta")
    DB_USER: str = os.getenv("DB_USER", "delivery_eta_user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DB_SSL_MODE: str = os.getenv("DB_SSL_MODE", "require")
    DB_CONNECTION_TIMEOUT: int = int(os.getenv("DB_CONNECTION_TIMEOUT", "30"))
    DB_POOL_SIZE: int = int(os.getenv("DB_POOL_SIZE", "5"))
    DB_MAX_OVERFLOW: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))
    DB_ECHO: bool = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

    @property
    def DATABASE_URL(self) -> str:
        """build DATABASE_URL from individual components or use explicit override"""
        # check if DATABASE_URL is explicitly set in env (for testing)
        explicit_url = os.getenv("DATABASE_URL")
        if explicit_url:
            return explicit_url

        # allow empty password if the DB doesn't need one
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}@"
            f"{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?sslmode={self.DB_SSL_MODE}&connect_timeout={self.DB_CONNECTION_TIMEOUT}"
        )

    # delivery estimate defaults, used when a store has no settings row
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")  # for rules without a timezone
    DEFAULT_AGGREGATION: str = os.getenv("DEFAULT_AGGREGATION", "latest")  # latest|earliest
    DEFAULT_DATE_FORMAT: str = os.getenv("DEFAULT_DATE_FORMAT", "short")  # short|long


settings = Settings()
