from datetime import datetime
from typing import List
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from src.core.env_manager import EnvManager


class Settings(BaseSettings):
    ASYNC_DATABASE_URL: str = EnvManager.get_env_variable(
        "ASYNC_DATABASE_URL", "sqlite+aiosqlite:///database.db"
    )
    SECRET_KEY: str = EnvManager.get_env_variable("SECRET_KEY", "supersecretkey")
    JWT_ALGORITHM: str = EnvManager.get_env_variable("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = EnvManager.get_env_variable(
        "ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24
    )

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "Blog Posts API")
    PROJECT_INFO: str = EnvManager.get_env_variable(
        "PROJECT_INFO", "Posts with thumbnails, categories and per-post ownership"
    )
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "1.0.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "UTC")
    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")

    UPLOAD_FOLDER: str = EnvManager.get_env_variable("UPLOAD_FOLDER", "uploads")
    MAX_THUMBNAIL_SIZE: int = EnvManager.get_env_variable("MAX_THUMBNAIL_SIZE", 2_000_000)
    ALLOWED_THUMBNAIL_EXTENSIONS: str = EnvManager.get_env_variable(
        "ALLOWED_THUMBNAIL_EXTENSIONS", ".png,.jpg,.jpeg,.gif,.webp,.svg,.avif"
    )

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)

    def get_thumbnail_extensions(self) -> List[str]:
        """Allowed thumbnail extensions, lower-cased and dot-prefixed."""
        extensions = []
        for item in self.ALLOWED_THUMBNAIL_EXTENSIONS.split(","):
            item = item.strip().lower()
            if item:
                extensions.append(item if item.startswith(".") else f".{item}")
        return extensions


settings = Settings()
