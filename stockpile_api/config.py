# stockpile_api/config.py
import re
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import List

from fastapi import Request
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: str) -> timedelta:
    """Parse a token lifetime such as ``3600``, ``30m``, ``24h`` or ``7d``."""
    match = _DURATION_RE.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "stockpiles"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""

    # Full connection URL, takes precedence over the DB_* parts
    DATABASE_URL: str = ""
    DB_AUTO_CREATE: bool = True

    JWT_SECRET: str
    JWT_EXPIRES_IN: str = "24h"
    JWT_ALGORITHM: str = "HS256"

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=str(env_path), extra="ignore")

    @field_validator("JWT_SECRET")
    @classmethod
    def _secret_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("JWT_SECRET must not be blank")
        return v

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def _expiry_parses(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper()

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            # SQLAlchemy only accepts the postgresql:// scheme
            if self.DATABASE_URL.startswith("postgres://"):
                return self.DATABASE_URL.replace("postgres://", "postgresql://", 1)
            return self.DATABASE_URL
        return URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        ).render_as_string(hide_password=False)

    @property
    def token_expires(self) -> timedelta:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


# Settings the running application was built with
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
