from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # DB
    DATABASE_URL: str = "sqlite:///./database.db"

    # JWT issued by the external auth provider
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Logging
    LOG_LEVEL: str = "INFO"

    # Pricing
    CURRENCY: str = "EUR"
    SLOW_CALCULATION_MS: float = 30.0
    MAX_PARTICIPANTS_DEFAULT: int = 999
    QUOTE_KEYS_MAX: int = 10000

    # Flash offer feed
    FLASH_OFFER_REFRESH_SECONDS: int = 60

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
