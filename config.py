# config.py

import os
from sqlalchemy.pool import StaticPool


def _env_int(name, default):
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-dev-key")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True, "pool_recycle": 280}

    # generation service
    GENERATION_PROVIDER = os.getenv("GENERATION_PROVIDER", "gemini")
    GENERATION_MODEL = os.getenv("GENERATION_MODEL", "")
    GENERATION_TIMEOUT = _env_int("GENERATION_TIMEOUT", 30)
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

    # pipeline
    RECENT_HISTORY_WINDOW = _env_int("RECENT_HISTORY_WINDOW", 10)
    DAILY_CACHE_TTL = _env_int("DAILY_CACHE_TTL", 0) or None  # seconds; None = end of local day
    DAILY_CACHE_BACKEND = os.getenv("DAILY_CACHE_BACKEND", "memory")
    TIME_ZONE = os.getenv("TIME_ZONE", "America/Denver")
    FALLBACK_CORPUS_PATH = os.getenv("FALLBACK_CORPUS_PATH", "")
    PUZZLES_ADMIN_TOKEN = os.getenv("PUZZLES_ADMIN_TOKEN", "")
    PUZZLES_RANDOM_SEED = os.getenv("PUZZLES_RANDOM_SEED") or None

    @staticmethod
    def init_app(app):
        pass


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DEV_DATABASE_URL",
        "sqlite:///local.db"  # keep relative and portable
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    GEMINI_API_KEY = ""
    OPENAI_API_KEY = ""
    FALLBACK_CORPUS_PATH = ""
    PUZZLES_ADMIN_TOKEN = "test-admin-token"
    PUZZLES_RANDOM_SEED = "1234"
    DAILY_CACHE_BACKEND = "memory"


def _production_database_uri():
    uri = os.getenv("DATABASE_URL", "")
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    if uri and "sslmode" not in uri:
        uri += "?sslmode=require"
    return uri


class ProductionConfig(Config):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = _production_database_uri()
    DAILY_CACHE_BACKEND = os.getenv("DAILY_CACHE_BACKEND", "database")


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig
}
