"""
Configuration for MoveID.
Reads environment variables, loading a .env file first when one exists.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv

MB = 1024 * 1024

# Load environment variables from .env file if it exists
env_path = Path.cwd() / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    max_image_bytes: int = 10 * MB
    max_video_bytes: int = 50 * MB
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("MOVEID_OPENAI_MODEL", "gpt-4o"),
            max_image_bytes=_env_int("MOVEID_MAX_IMAGE_MB", 10) * MB,
            max_video_bytes=_env_int("MOVEID_MAX_VIDEO_MB", 50) * MB,
            log_level=os.getenv("MOVEID_LOG_LEVEL", "INFO").upper(),
            cors_origins=_env_list("MOVEID_CORS_ORIGINS", "*"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
