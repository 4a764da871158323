from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 5000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]
    DEFAULT_USER_ID: str = "guest"
    SEED_SAMPLE_DATA: bool = True
    RESET_DB: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
