from pydantic_settings import BaseSettings
from pydantic import Field
from pydantic_settings import SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow",
    )

    # Upload storage
    LOG_DIR: str = Field(default="logs")
    UPLOAD_FILE_PREFIX: str = Field(default="catalina_")
    UPLOAD_FILE_EXTENSION: str = Field(default=".out")
    MAX_UPLOAD_MB: int = Field(default=200)

    # Pointer to the active log file, survives restarts
    STATE_FILE: str = Field(default="logs/last_uploaded_file.txt")

    # Analytics defaults
    TOP_MESSAGES_DEFAULT_LIMIT: int = Field(default=10)
    SEARCH_DEFAULT_PAGE_SIZE: int = Field(default=10)

    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173", "http://localhost:8000"]

settings = Settings()
