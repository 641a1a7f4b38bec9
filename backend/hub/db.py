from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from hub.config import settings

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}


def enable_sqlite_foreign_keys(eng: Engine) -> None:
    # SQLite ignores ON DELETE rules unless the pragma is set per connection
    if eng.dialect.name != "sqlite":
        return

    @event.listens_for(eng, "connect")
    def _fk_pragma(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()


engine = create_engine(settings.database_url, pool_pre_ping=True, connect_args=_connect_args)
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
)

class Base(DeclarativeBase):
    pass

def init_db() -> None:
    # Importing models registers every table on Base.metadata
    from hub import models  # noqa: F401
    Base.metadata.create_all(bind=engine)

# Dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
