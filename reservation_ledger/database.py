from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from reservation_ledger.config import settings

Base = declarative_base()

def build_engine(url: str) -> Engine:
    """Create an engine; SQLite connections may be handed between threads"""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return create_engine(url, **options)
    return create_engine(url, pool_pre_ping=True)

def build_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)

engine = build_engine(settings.database_url)
SessionLocal = build_sessionmaker(engine)

def init_db(bind: Engine = engine):
    """Create all ledger tables if they do not exist yet"""
    # Model registration happens on import
    import reservation_ledger.models  # noqa: F401
    Base.metadata.create_all(bind=bind)
