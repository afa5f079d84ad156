import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError

from ..config import DB_RETRY_ATTEMPTS, DB_RETRY_DELAY_SECONDS
from ..database import SessionLocal

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_retry(
    fn: Callable[..., T],
    *,
    attempts: int = DB_RETRY_ATTEMPTS,
    delay_seconds: float = DB_RETRY_DELAY_SECONDS,
    session_factory=None,
) -> T:
    """Run ``fn(db)`` in a fresh session, retrying transient storage failures.

    Only for operations that are idempotent or re-check state on every attempt;
    domain errors (``MatchEngineError``) propagate on the first raise.
    """
    factory = session_factory or SessionLocal
    attempts = max(1, attempts)
    for attempt in range(1, attempts + 1):
        with factory() as db:
            try:
                return fn(db)
            except OperationalError as exc:
                db.rollback()
                if attempt == attempts:
                    logger.error(f"[db] giving up after {attempts} attempts: {exc}")
                    raise
                logger.warning(f"[db] transient failure (attempt {attempt}/{attempts}): {exc}")
        time.sleep(delay_seconds)
