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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 30))
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 10))

    # Accounts
    RESET_CODE_TTL_MINUTES = int(data.get("RESET_CODE_TTL_MINUTES", 30))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    REQUIRE_EMAIL_CONFIRMATION = bool(data.get("REQUIRE_EMAIL_CONFIRMATION", True))

    # Email gateway
    DISABLE_EMAILS = bool(data.get("DISABLE_EMAILS", True))
    EMAIL_GATEWAY_URL = data.get("EMAIL_GATEWAY_URL", "")
    EMAIL_GATEWAY_API_KEY = data.get("EMAIL_GATEWAY_API_KEY", "")
    EMAIL_GATEWAY_HMAC_SECRET = data.get("EMAIL_GATEWAY_HMAC_SECRET", "")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:8043")

    # Federated login
    OIDC_USERINFO_URL = data.get(
        "OIDC_USERINFO_URL",
        "http://localhost:8080/realms/master/protocol/openid-connect/userinfo",
    )
