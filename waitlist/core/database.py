from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.schema import CreateTable

Base = declarative_base()

MEMORY_PATH = ":memory:"


def is_plain_file_path(path: str) -> bool:
    """True unless path is an in-memory database or a SQLite "file:" URI."""
    return path != MEMORY_PATH and not path.startswith("file:")


def database_url(path: str) -> str:
    if path == MEMORY_PATH:
        return "sqlite://"
    if path.startswith("file:"):
        return f"sqlite:///{path}{'&' if '?' in path else '?'}uri=true"
    return f"sqlite:///{path}"


def create_db_engine(path: str) -> Engine:
    options = {}
    if path == MEMORY_PATH:
        # One shared connection, otherwise every pooled connection gets its own empty database
        options["poolclass"] = StaticPool

    engine = create_engine(
        database_url(path),
        connect_args={"check_same_thread": False},  # Requests are served from a thread pool
        **options,
    )

    # Apply PRAGMAs per connection
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        # Readers don't block the single writer
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.execute("PRAGMA synchronous=NORMAL;")
        cursor.execute("PRAGMA temp_store=MEMORY;")
        cursor.close()

    return engine


def init_database(engine: Engine) -> None:
    """Check the database is reachable, then create any missing tables.

    Every statement is CREATE TABLE IF NOT EXISTS, so this is safe to run on
    each startup and from several processes at once.
    """
    # Register the tables on Base.metadata
    from waitlist.models import HoneypotEntry, WaitlistEntry  # noqa: F401

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        raise ConnectionError(f"cannot reach database {engine.url}: {e.orig}") from e

    with engine.begin() as conn:
        for table in Base.metadata.sorted_tables:
            conn.execute(CreateTable(table, if_not_exists=True))


def setup_database(path: str) -> Engine:
    engine = create_db_engine(path)
    try:
        init_database(engine)
    except Exception:
        engine.dispose()
        raise
    return engine


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
