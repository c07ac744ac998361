"""
Environment-aware configuration.
Values come from the process environment, with .env loaded first.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" unlocks POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DB_URL") or os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

    # jwt configurations
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM = "HS256"
    JWT_ISSUER = os.getenv("JWT_ISSUER", "chirpy")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))

    # shared secret of the payment provider's webhook
    POLKA_KEY = os.getenv("POLKA_KEY", "")

    CHIRP_MAX_LENGTH = int(os.getenv("CHIRP_MAX_LENGTH", "140"))
    PROFANE_WORDS = _csv(os.getenv("PROFANE_WORDS", "kerfuffle,sharbert,fornax"))

    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.getcwd())


class DevelopmentConfig(BaseConfig):
    DEBUG = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    PLATFORM = "dev"
    JWT_SECRET = "testing-secret-token"
    POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/testing).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
