import uuid

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    # Readers of the shared-cache database never wait on table locks.
    cursor.execute("PRAGMA read_uncommitted=ON")
    cursor.close()


def get_memory_engine(pool_size: int = 5, name: str | None = None) -> Engine:
    """Engine for a named, shared-cache, in-memory SQLite database.

    Every pooled connection opens the same database, so reads can run on
    separate connections in parallel. The database lives as long as at least
    one connection to it stays open.
    """
    name = name or f"sunshine-{uuid.uuid4().hex}"
    engine = create_engine(
        f"sqlite:///file:{name}?mode=memory&cache=shared&uri=true",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=pool_size * 2,
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


SCHEMA_SQL = """\
CREATE VIRTUAL TABLE departments_fts USING fts5(
    name, name_slug, email,
    tokenize = 'unicode61'
);
"""

INSERT_SQL = """\
INSERT INTO departments_fts (rowid, name, name_slug, email)
VALUES (:rowid, :name, :name_slug, :email)
"""

SEARCH_SQL = """\
SELECT name, name_slug, email
FROM departments_fts
WHERE departments_fts MATCH :expr
ORDER BY rank, name
"""
