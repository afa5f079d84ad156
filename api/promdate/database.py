import logging
import time
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, future=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
Base = declarative_base()


def insert_ignore(db, model, values: dict[str, Any]) -> int:
    """INSERT ... ON CONFLICT DO NOTHING for the session's dialect.

    Returns the number of inserted rows (0 when a unique constraint already
    held a row for the same key).
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(f"insert_ignore is not supported on dialect {dialect!r}")
    stmt = insert(model).values(**values).on_conflict_do_nothing()
    res = db.execute(stmt)
    return int(res.rowcount or 0)


def init_db() -> None:
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)


def wait_for_db(max_attempts: int = 20, delay_seconds: float = 1.5) -> None:
    last_err: Exception | None = None
    for attempt in range(max_attempts):
        try:
            with SessionLocal() as db:
                db.execute(text("SELECT 1"))
                db.commit()
            return
        except OperationalError as exc:
            last_err = exc
            logger.warning(f"[db] not ready (attempt {attempt + 1}/{max_attempts}): {exc}")
            time.sleep(delay_seconds)
    if last_err:
        raise last_err
