"""
Database engine, session factory and table bootstrap

The engine and session factory are created by the application factory and
kept on ``app.state``; request handlers receive a session through ``get_db``.
"""
import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """
    Create SQLAlchemy engine for the given URL
    
    SQLite connections are shared across threads; an in-memory SQLite
    database is pinned to a single connection so every session sees it.
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args={**connect_args, "timeout": 30})
    
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create session factory bound to engine"""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=True)


def init_db(engine: Engine, max_retries: int = 5, retry_delay: int = 1) -> None:
    """
    Create all tables, retrying while the database is not reachable yet
    
    Args:
        engine: Engine to create tables on
        max_retries: Number of connection attempts
        retry_delay: Base delay for exponential backoff (seconds)
    """
    # Import models so they are registered on Base.metadata
    from app.models import account, order, product  # noqa: F401
    
    @retry(
        stop=stop_after_attempt(max_retries),
        wait=wait_exponential(multiplier=retry_delay, min=1, max=10),
        retry=retry_if_exception_type(OperationalError),
        reraise=True
    )
    def _create_all():
        logger.info("Creating tables on %s", engine.url.render_as_string(hide_password=True))
        Base.metadata.create_all(bind=engine)
    
    _create_all()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency yielding a session from the application's session factory"""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
