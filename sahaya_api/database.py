"""Database configuration and session management."""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from sahaya_api.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url

# Seconds a SQLite writer waits on the database lock before giving up
SQLITE_BUSY_TIMEOUT = 30


def configure_sqlite(engine: Engine) -> Engine:
    """
    Make every SQLite transaction take the write lock up front.

    pysqlite's deferred BEGIN lets two connections hold a read lock and then
    both try to upgrade, which SQLite resolves by failing one of them
    immediately. With BEGIN IMMEDIATE concurrent writers queue on the busy
    timeout instead, which is what concurrent human-ID allocation relies on.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_engine(url: str) -> Engine:
    """Create an engine with the settings appropriate for its backend."""
    if url.startswith("sqlite"):
        # SQLite-specific config
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )
        return configure_sqlite(engine)

    # PostgreSQL config (production)
    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


engine = build_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for FastAPI endpoints to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
