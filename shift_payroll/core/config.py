# shift_payroll/core/config.py
import os
from pydantic_settings import BaseSettings
from pydantic import validator


class Settings(BaseSettings):
    """Engine settings loaded from .env"""

    # === Database ===
    DATABASE_URL: str = "sqlite+aiosqlite:///./shift_payroll.db"
    DATABASE_TEST_URL: str = "sqlite+aiosqlite:///:memory:"

    @validator("DATABASE_URL")
    def validate_database_url(cls, v):
        """Ensure database URL is safe for current environment"""
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env == "production" and ("localhost" in v or v.startswith("sqlite")):
            raise ValueError("Production environment cannot use a local database!")
        return v

    # === System ===
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # === Shift Rules ===
    DEFAULT_GRACE_PERIOD_MINUTES: int = 15
    DEFAULT_BREAK_DURATION_MINUTES: int = 60

    # === Attendance Rules ===
    MIN_WORKING_HOURS: int = 8   # full day
    HALF_DAY_HOURS: int = 4

    # === Payroll Rules ===
    PAYROLL_MIN_YEAR: int = 2000
    PAYROLL_MAX_YEAR: int = 2100

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Create a global settings instance
settings = Settings()
