from datetime import timedelta

import pytest
from pydantic import ValidationError

from stockpile_api.config import Settings, parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("3600", timedelta(seconds=3600)),
        ("45s", timedelta(seconds=45)),
        ("30m", timedelta(minutes=30)),
        ("24h", timedelta(hours=24)),
        ("7d", timedelta(days=7)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


def test_parse_duration_rejects_garbage():
    with pytest.raises(ValueError):
        parse_duration("soon")


def _settings(**kwargs):
    kwargs.setdefault("JWT_SECRET", "secret")
    return Settings(_env_file=None, **kwargs)


def test_database_url_built_from_parts():
    s = _settings(DATABASE_URL="", DB_HOST="db", DB_PORT=5433, DB_NAME="piles", DB_USER="u", DB_PASSWORD="p")
    assert s.database_url == "postgresql+psycopg2://u:p@db:5433/piles"


def test_database_url_rewrites_legacy_scheme():
    s = _settings(DATABASE_URL="postgres://u:p@host/db")
    assert s.database_url == "postgresql://u:p@host/db"


def test_cors_origins_split():
    s = _settings(CORS_ORIGINS="http://a.example, http://b.example,")
    assert s.cors_origins == ["http://a.example", "http://b.example"]


def test_blank_secret_rejected():
    with pytest.raises(ValidationError):
        _settings(JWT_SECRET="  ")


def test_invalid_expiry_rejected():
    with pytest.raises(ValidationError):
        _settings(JWT_EXPIRES_IN="forever")
