# app/core/config.py
from typing import Optional

from pydantic_settings import BaseSettings

from settings import DatabaseConfig, SnapshotFiles

class Settings(BaseSettings):
    DATABASE_URL: str = DatabaseConfig.DATABASE_URL
    SCHEMA_SNAPSHOT_PATH: Optional[str] = str(SnapshotFiles.SCHEMA_SNAPSHOT_PATH)
    LOAD_SNAPSHOT_ON_STARTUP: bool = True

    class Config:
        extra = "allow"  # allow additional fields from .env
        env_file = ".env"

settings = Settings()
