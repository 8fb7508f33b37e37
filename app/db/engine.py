# app/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from app.config import get_settings


def _enable_sqlite_foreign_keys(dbapi_conn, _record) -> None:
    # SQLite ignores REFERENCES / ON DELETE CASCADE unless asked per connection
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(url, echo=echo, future=True, **kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


@lru_cache
def get_engine() -> Engine:
    """
    The shared connection pool. Routes receive it through Depends(get_engine).
    """
    settings = get_settings()
    return build_engine(settings.database_url, echo=settings.db_echo)
