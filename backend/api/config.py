"""Server configuration, read from CUBESMITH_* environment variables or .env."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CUBESMITH_",
        env_file=str(PROJECT_ROOT / ".env"),
        extra="ignore",
    )

    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    api_prefix: str = "/api"

    # Fine-tuning dataset restored on startup and saved on shutdown when set.
    dataset_path: str | None = None

    # Seed for reproducible random generation.
    random_seed: int | None = None


def get_settings() -> Settings:
    return Settings()
