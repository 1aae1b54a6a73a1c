from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: Optional[str] = None
    PGDATABASE: Optional[str] = None
    PGUSER: Optional[str] = None
    PGPASSWORD: Optional[str] = None
    PGSSLMODE: str = "require"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Application
    PROJECT_NAME: str = "Train Reservation Ledger"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.PGHOST:
            return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
        return "sqlite:///./reservation_ledger.db"

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
