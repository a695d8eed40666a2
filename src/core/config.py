
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    PROJECT_NAME: str = "Photo DB"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./photos.db"
    DATABASE_ECHO: bool = False

    class Config:
        env_file = ".env"

configs = Settings()
