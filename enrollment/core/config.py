from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings


BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Storage settings
    DATA_DIR: Path = BASE_DIR  # Database file and photo tree live here
    DB_FILE: str = "users.db"
    PHOTOS_DIR: str = "photos"
    MAX_PHOTO_SLOTS: int = 4

    # Default administrative login, created when no credential exists
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"

    # Logging settings
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        validate_default = True

    @property
    def db_path(self) -> Path:
        """Get path of the database file."""
        return self.DATA_DIR / self.DB_FILE

    @property
    def photos_path(self) -> Path:
        """Get root directory of the per-record photo folders."""
        return self.DATA_DIR / self.PHOTOS_DIR

    @property
    def log_path(self) -> Path:
        """Get path of the application log file."""
        return self.DATA_DIR / self.LOG_DIR / "app.log"


@lru_cache()
def get_settings() -> Settings:
    """
    Returns cached Settings instance to avoid reloading .env file on every access
    """
    return Settings()
