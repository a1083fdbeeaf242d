"""
Runtime configuration.

Values come from environment variables, optionally seeded from a `.env`
file in the working directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/jobgraph.db"

_TRUTHY = {"1", "true", "yes", "on"}


def load_env(env_path: Optional[Path] = None) -> bool:
    """Load .env from project root if present. Returns True when a file was read."""
    env_path = env_path or Path.cwd() / ".env"
    if not env_path.exists():
        return False
    return load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    log_to_file: bool = True


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        database_url=os.getenv("JOBGRAPH_DATABASE_URL", DEFAULT_DATABASE_URL),
        log_level=os.getenv("JOBGRAPH_LOG_LEVEL", "INFO").upper(),
        log_dir=Path(os.getenv("JOBGRAPH_LOG_DIR", "logs")),
        log_to_file=os.getenv("JOBGRAPH_LOG_TO_FILE", "true").strip().lower() in _TRUTHY,
    )
