# prepmate/core/config.py
from typing import Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    SECRET_KEY: str = "change-me"  # override in .env / secrets
    # Access token expiry (minutes); env values arrive as strings and are coerced
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    # PBKDF2 work factor for new hashes; stored hashes carry their own count
    PASSWORD_HASH_ITERATIONS: int = 100_000

    # Redis (company archive cache)
    REDIS_URL: str = "redis://localhost:6379/0"
    COMPANY_ARCHIVE_TTL_SEC: int = 60 * 60 * 24

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/prepmate"
    MONGODB_DB: str = "prepmate"

    # LLM
    # Adapter selection: 'mock', 'gemini' or a dotted module path
    LLM_ADAPTER: str = "mock"
    LLM_API_KEY: Optional[str] = None
    LLM_MODEL: str = "gemini-2.5-flash"
    LLM_HTTP_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    LLM_TIMEOUT_SEC: int = 60
    # transport-level retries inside the HTTP adapter only
    LLM_RETRIES: int = 0
    LLM_BACKOFF_FACTOR: float = 0.5
    LLM_TEMPERATURE: float = 0.5
    LLM_MAX_OUTPUT_TOKENS: int = 2048

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

# single shared settings instance
settings = Settings()
