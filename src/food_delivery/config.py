from decimal import Decimal

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24 * 7

    DELIVERY_FEE: Decimal = Decimal("50")
    TAX_RATE: Decimal = Decimal("0.05")
    ESTIMATED_DELIVERY_MINUTES: int = 45

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"

settings = Settings()
