from pydantic_settings import BaseSettings
from typing import List

from app.core.constants import StoreBackendEnum

class Settings(BaseSettings):
    PROJECT_NAME: str = "Stock Market Dashboard"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Tokens are issued by the identity provider, we only verify them
    SECRET_KEY: str = "dev-secret-key-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    # Storage
    STORE_BACKEND: StoreBackendEnum = StoreBackendEnum.MEMORY
    DATABASE_URL: str = "sqlite:///./dashboard.db"
    SEED_DEFAULT_STOCKS: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
