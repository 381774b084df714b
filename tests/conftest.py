"""
Pytest configuration and shared fixtures.
"""

import itertools
from datetime import datetime, timedelta
from typing import Any, Dict

import pytest

from jobboard.auth import AuthUser, StaticAuthProvider
from jobboard.database import Company, Job, get_session_factory, init_database
from jobboard.logger import StructuredLogger, get_logger, reset_logger

OWNER_ID = "user-owner"
OTHER_ID = "user-other"
BASE_TIME = datetime(2026, 1, 1, 9, 0)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep the global logger off the console and out of ./logs."""
    reset_logger()
    get_logger(enable_file=False, enable_console=False)
    yield
    reset_logger()


@pytest.fixture
def test_logger() -> StructuredLogger:
    return StructuredLogger(name="jobboard.test", enable_file=False, enable_console=False)


@pytest.fixture
def engine(tmp_path):
    engine = init_database(f"sqlite:///{tmp_path / 'jobs.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return get_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def companies(db_session) -> Dict[str, Company]:
    """'acme' belongs to OWNER_ID, 'beta' to OTHER_ID."""
    acme = Company(id="acme", user_id=OWNER_ID, name="Acme", bio="We build rockets", logo="https://cdn.example.com/acme.png")
    beta = Company(id="beta", user_id=OTHER_ID, name="Beta", bio="We sell rockets")
    db_session.add_all([acme, beta])
    db_session.commit()
    return {"acme": acme, "beta": beta}


@pytest.fixture
def make_job(db_session, companies):
    """
    Insert a visible job; each call is posted one hour after the previous one.

    Keyword arguments override column values.
    """
    counter = itertools.count(1)

    def _make(**overrides: Any) -> Job:
        n = next(counter)
        fields = dict(
            id=f"job-{n:03d}",
            user_id=OWNER_ID,
            company_id="acme",
            title=f"Backend Engineer {n}",
            description="Build and run services",
            type="full_time",
            category="engineering",
            work_mode="remote",
            city="Bengaluru",
            address="MG Road",
            application="https://acme.example.com/apply",
            skills=["python", "sql"],
            is_verified_job=True,
            expired=False,
            posted_at=BASE_TIME + timedelta(hours=n),
        )
        fields.update(overrides)
        job = Job(**fields)
        db_session.add(job)
        db_session.commit()
        return job

    return _make


@pytest.fixture
def owner_auth() -> StaticAuthProvider:
    return StaticAuthProvider(AuthUser(id=OWNER_ID))


@pytest.fixture
def other_auth() -> StaticAuthProvider:
    return StaticAuthProvider(AuthUser(id=OTHER_ID))


@pytest.fixture
def valid_job_payload() -> Dict[str, Any]:
    """Valid create/update payload, using the wire field names."""
    return {
        "title": "Platform Engineer",
        "description": "Own the deployment platform",
        "companyId": "acme",
        "type": "full_time",
        "category": "engineering",
        "application": "https://acme.example.com/apply",
        "city": "Pune",
        "address": "Baner Road",
        "workMode": "hybrid",
        "skills": ["python", "kubernetes"],
        "hasSalaryRange": True,
        "minSalary": 800000,
        "maxSalary": 1200000,
        "hasExperiencerange": True,
        "minExperience": 2,
        "maxExperience": 5,
        "hasExpiryDate": False,
    }


@pytest.fixture
def reload(db_session):
    """Fetch a fresh copy of a row written through another session."""

    def _reload(model, key):
        db_session.expire_all()
        return db_session.get(model, key)

    return _reload
