from typing import Any

from sqlalchemy import insert

from ..models import ProductEvent


def log_product_event(
    db,
    *,
    event_name: str,
    user_id: str | None = None,
    properties: dict[str, Any] | None = None,
) -> None:
    # Runs inside the caller's transaction so the event commits (or not) with the write it describes.
    db.execute(
        insert(ProductEvent).values(
            user_id=user_id or None,
            event_name=event_name,
            properties=properties or {},
        )
    )
