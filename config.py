import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    PUBLIC_BASE_URL = data.get("PUBLIC_BASE_URL", "http://localhost:5173")
    PROPOSAL_TOKEN_TTL_HOURS = int(data.get("PROPOSAL_TOKEN_TTL_HOURS", 168))
    TOKEN_ISSUE_MAX_ATTEMPTS = int(data.get("TOKEN_ISSUE_MAX_ATTEMPTS", 5))
