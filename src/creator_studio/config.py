"""
Configuration for Creator Studio
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_DB_PATH = Path.home() / ".creator_studio" / "data.db"
DEFAULT_EXPORT_FILENAME = "creator_studio_projects.json"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except (ValueError, TypeError):
        return default


class StudioConfig(BaseModel):
    """Runtime configuration for the studio and its storage"""
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_attempts: int = Field(default=1, ge=1)
    db_path: Path = DEFAULT_DB_PATH

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """
        Build configuration from the process environment.

        GEMINI_API_KEY takes precedence over the generic API_KEY.
        """
        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None
        db_path = os.getenv("CREATOR_STUDIO_DB")

        return cls(
            api_key=api_key,
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            max_attempts=max(_int_env("CREATOR_STUDIO_MAX_ATTEMPTS", 1), 1),
            db_path=Path(db_path) if db_path else DEFAULT_DB_PATH,
        )
