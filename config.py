import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_MINUTES = data.get("ACCESS_TOKEN_MINUTES", 15)
    SESSION_LIFETIME_DAYS = data.get("SESSION_LIFETIME_DAYS", 14)
    SESSION_OPERATION_TIMEOUT_SECONDS = data.get("SESSION_OPERATION_TIMEOUT_SECONDS", 5)
    CLEANUP_ENABLED = bool(data.get("CLEANUP_ENABLED", True))
    CLEANUP_INTERVAL_SECONDS = data.get("CLEANUP_INTERVAL_SECONDS", 3600)
    CLEANUP_INITIAL_DELAY_SECONDS = data.get("CLEANUP_INITIAL_DELAY_SECONDS", 60)
    INTERNAL_API_KEY = data.get("INTERNAL_API_KEY", "test-internal-key-12345")
