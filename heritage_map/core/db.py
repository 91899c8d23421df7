from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from typing import Generator

from heritage_map.config.settings import get_settings


def _engine_options(url: str) -> dict:
    options = {"pool_pre_ping": True, "future": True, "echo": get_settings().database.echo}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            options["poolclass"] = StaticPool
    return options


DATABASE_URL = get_settings().database.url

engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)

# SQLAlchemy declarative base for models
Base = declarative_base()


@contextmanager
def db_session():
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    # models must be imported so their tables are registered on Base.metadata
    import heritage_map.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    import heritage_map.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)
