# payroll_api/config.py
import os

from sqlalchemy.pool import StaticPool

DEFAULT_PORT = 8080


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("DB_HOST", "localhost")
    port = os.getenv("DB_PORT", "5432")
    name = os.getenv("DB_NAME", "payroll")
    user = os.getenv("DB_USER", "postgres")
    password = os.getenv("DB_PASSWORD", "")
    return f"postgresql+psycopg://{user}:{password}@{host}:{port}/{name}"


def _port() -> int:
    try:
        return int(os.getenv("PORT", DEFAULT_PORT))
    except ValueError:
        return DEFAULT_PORT


class Config:
    """Defaults; every value can be overridden from the environment."""

    SQLALCHEMY_DATABASE_URI = _database_url()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    PORT = _port()
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class TestingConfig(Config):
    TESTING = True
    # one shared in-memory database for every session of the app
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    LOG_LEVEL = "DEBUG"


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def logging_config(level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "level": level,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }
