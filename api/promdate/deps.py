from typing import Any, Iterator

from .database import SessionLocal


def get_db() -> Iterator[Any]:
    with SessionLocal() as db:
        yield db


def user_id_from(current_user: dict[str, Any]) -> str:
    return str(current_user["id"])
