# app/data/database.py
import time
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.utils.logging import get_logger

logger = get_logger(__name__)

# postgres: query_canceled (statement_timeout)
PG_QUERY_CANCELED = "57014"
# co ile instrukcji VM sqlite sprawdza deadline
SQLITE_PROGRESS_STEPS = 1000


class Base(DeclarativeBase):
    pass


def create_db_engine(database_url: str, statement_timeout: float = 0) -> Engine:
    """
    Tworzy engine (wspólny dla całego procesu). Błędny URL kończy start aplikacji.

    statement_timeout (sekundy, 0 = bez limitu) ogranicza każde zapytanie po stronie bazy.
    Przerwane zapytanie kończy się OperationalError i rollbackiem, nic nie zostaje zapisane.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        # handlery sync działają w threadpoolu
        connect_args = {"check_same_thread": False, "timeout": 20}
    elif database_url.startswith("postgresql") and statement_timeout:
        connect_args = {"options": f"-c statement_timeout={int(statement_timeout * 1000)}"}

    engine = create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)
    if database_url.startswith("sqlite") and statement_timeout:
        _install_sqlite_statement_timeout(engine, statement_timeout)
    return engine


def _install_sqlite_statement_timeout(engine: Engine, timeout: float) -> None:
    # sqlite nie ma statement_timeout, progress handler przerywa zapytanie po deadline
    @event.listens_for(engine, "connect")
    def _set_progress_handler(dbapi_conn, connection_record):
        info = connection_record.info
        info["statement_deadline"] = None

        def _check_deadline():
            deadline = info.get("statement_deadline")
            return 1 if deadline is not None and time.monotonic() > deadline else 0

        dbapi_conn.set_progress_handler(_check_deadline, SQLITE_PROGRESS_STEPS)

    @event.listens_for(engine, "before_cursor_execute")
    def _start_deadline(conn, cursor, statement, parameters, context, executemany):
        conn.connection.info["statement_deadline"] = time.monotonic() + timeout

    @event.listens_for(engine, "after_cursor_execute")
    def _clear_deadline(conn, cursor, statement, parameters, context, executemany):
        conn.connection.info["statement_deadline"] = None


def is_statement_timeout(error: OperationalError) -> bool:
    """True, gdy baza przerwała zapytanie z powodu limitu czasu."""
    orig = error.orig
    if getattr(orig, "pgcode", None) == PG_QUERY_CANCELED:
        return True
    return "interrupted" in str(orig)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """CREATE TABLE IF NOT EXISTS dla wszystkich modeli. Idempotentne, bez retry."""
    # rejestracja modeli w Base.metadata
    from app.data.models.user import UserModel  # noqa: F401

    logger.info(f"Initializing database schema: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create database tables")
        raise
    logger.info("Database schema ready")


def ping(engine: Engine) -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False


def get_db(request: Request) -> Iterator[Session]:
    """Dependency FastAPI: jedna sesja na request, zawsze zamykana."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
