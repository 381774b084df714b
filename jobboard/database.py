"""
Database schema and connection management.

Uses SQLAlchemy over any relational URL (SQLite by default) for
companies and their job postings.
"""

import uuid
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, relationship, sessionmaker

Base = declarative_base()


def _new_id() -> str:
    return uuid.uuid4().hex


class Company(Base):
    """Company that publishes jobs; owned by a single user."""

    __tablename__ = "companies"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=False, default="")
    logo = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    jobs = relationship("Job", back_populates="company")


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    company_id = Column(String, ForeignKey("companies.id"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String, nullable=False)  # employment type
    category = Column(String, nullable=False, index=True)
    work_mode = Column(String, nullable=False)
    city = Column(String, nullable=False)
    address = Column(String, nullable=False)
    application = Column(String, nullable=False)  # apply URL or contact
    skills = Column(JSON, nullable=False, default=list)

    has_salary_range = Column(Boolean, nullable=False, default=False)
    min_salary = Column(Integer, nullable=True)
    max_salary = Column(Integer, nullable=True)

    has_experience_range = Column(Boolean, nullable=False, default=False)
    min_experience = Column(Integer, nullable=True)
    max_experience = Column(Integer, nullable=True)

    has_expiry_date = Column(Boolean, nullable=False, default=False)
    expiry_date = Column(DateTime, nullable=True)

    is_verified_job = Column(Boolean, nullable=False, default=False)
    expired = Column(Boolean, nullable=False, default=False)
    posted_at = Column(DateTime, nullable=False, default=datetime.now, index=True)

    company = relationship("Company", back_populates="jobs")


def get_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite file databases get their parent directory created.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url)


def init_database(database_url: str) -> Engine:
    """
    Initialize database and create tables.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        The engine the tables were created on
    """
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    """
    Get a session factory bound to the engine.

    Objects stay readable after commit so actions can shape payloads
    from them once the transaction is over.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """Open a session, commit on success, roll back on error, always close."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
