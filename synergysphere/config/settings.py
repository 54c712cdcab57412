from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application configuration settings.
    Loads from environment variables or .env file.
    """
    PROJECT_NAME: str = "SynergySphere"
    PROJECT_VERSION: str = "0.1.0"
    PORT: int = 5001

    DATABASE_URL: str
    DB_POOL_SIZE: int = 10
    # Seconds a pooled connection may live before it is recycled
    DB_POOL_IDLE_TIMEOUT: int = 10

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60

    LOG_LEVEL: str = "INFO"

    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

settings = Settings()
