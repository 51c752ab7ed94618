import os
from pydantic_settings import BaseSettings, SettingsConfigDict



class Settings(BaseSettings):
    APP_NAME: str = os.getenv("APP_NAME", "tinyfeed")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")

    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    FEED_KEY_PREFIX: str = os.getenv("FEED_KEY_PREFIX", "feed:")

    # Overrides scheme+host of the incoming request when building feed URLs
    PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "")

    WRITE_KEY_HEADER: str = os.getenv("WRITE_KEY_HEADER", "X-Write-Key")

    # Feed limits
    POST_RATE_LIMIT_MS: int = int(os.getenv("POST_RATE_LIMIT_MS", "60000"))
    MAX_POSTS: int = int(os.getenv("MAX_POSTS", "1000"))
    MAX_CONTENT_LENGTH: int = int(os.getenv("MAX_CONTENT_LENGTH", "500"))
    MAX_URL_LENGTH: int = int(os.getenv("MAX_URL_LENGTH", "2000"))
    MAX_NAME_LENGTH: int = int(os.getenv("MAX_NAME_LENGTH", "30"))
    MAX_ABOUT_LENGTH: int = int(os.getenv("MAX_ABOUT_LENGTH", "160"))

    # Generated identifiers
    FEED_ID_LENGTH: int = int(os.getenv("FEED_ID_LENGTH", "8"))
    WRITE_KEY_LENGTH: int = int(os.getenv("WRITE_KEY_LENGTH", "12"))
    POST_ID_LENGTH: int = int(os.getenv("POST_ID_LENGTH", "6"))

    # scrypt cost for newly hashed write keys
    KDF_N: int = int(os.getenv("KDF_N", "16384"))
    KDF_R: int = int(os.getenv("KDF_R", "8"))
    KDF_P: int = int(os.getenv("KDF_P", "1"))

    STORE_MAX_RETRIES: int = int(os.getenv("STORE_MAX_RETRIES", "16"))

    FEED_CACHE_SECONDS: int = int(os.getenv("FEED_CACHE_SECONDS", "300"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
