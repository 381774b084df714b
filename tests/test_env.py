"""
Tests for environment configuration.
"""

import os
from pathlib import Path

from jobboard.env import DEFAULT_DATABASE_URL, load_env, load_settings


def test_defaults(monkeypatch):
    for key in ("JOBBOARD_DATABASE_URL", "JOBBOARD_JOBS_PER_PAGE", "JOBBOARD_LOG_LEVEL", "JOBBOARD_LOG_DIR"):
        monkeypatch.delenv(key, raising=False)

    settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.jobs_per_page == 10
    assert settings.log_level == "INFO"
    assert settings.log_dir == Path("logs")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JOBBOARD_DATABASE_URL", "sqlite:///tmp/other.db")
    monkeypatch.setenv("JOBBOARD_JOBS_PER_PAGE", "25")
    monkeypatch.setenv("JOBBOARD_LOG_LEVEL", "DEBUG")

    settings = load_settings()

    assert settings.database_url == "sqlite:///tmp/other.db"
    assert settings.jobs_per_page == 25
    assert settings.log_level == "DEBUG"


def test_load_env_reads_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("JOBBOARD_LOG_LEVEL", raising=False)
    (tmp_path / ".env").write_text("JOBBOARD_LOG_LEVEL=WARNING\n")
    monkeypatch.chdir(tmp_path)

    load_env()

    assert os.environ["JOBBOARD_LOG_LEVEL"] == "WARNING"
    monkeypatch.delenv("JOBBOARD_LOG_LEVEL")


def test_load_env_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    load_env()  # no .env: nothing happens
