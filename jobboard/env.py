import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/jobs.db"
DEFAULT_JOBS_PER_PAGE = 10


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    jobs_per_page: int = DEFAULT_JOBS_PER_PAGE
    log_level: str = "INFO"
    log_dir: Path = Path("logs")


def load_settings() -> Settings:
    """
    Build settings from the environment.

    Call load_env() first if values should come from a .env file.
    """
    return Settings(
        database_url=os.getenv("JOBBOARD_DATABASE_URL", DEFAULT_DATABASE_URL),
        jobs_per_page=int(os.getenv("JOBBOARD_JOBS_PER_PAGE", DEFAULT_JOBS_PER_PAGE)),
        log_level=os.getenv("JOBBOARD_LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("JOBBOARD_LOG_DIR", "logs")),
    )
