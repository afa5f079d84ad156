import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from .. import repo
from ..auth.deps import get_current_user
from ..deps import get_db, user_id_from
from ..schemas import BlockRequest, ReportRequest
from ..services.events import log_product_event

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/safety/block")
def safety_block(payload: BlockRequest, current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    user_id = user_id_from(current_user)
    blocked_user_id = payload.blocked_user_id.strip()
    if blocked_user_id == user_id:
        raise HTTPException(status_code=400, detail="Cannot block yourself")
    if repo.get_profile(db, blocked_user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    created = repo.create_user_block(db, user_id, blocked_user_id)
    if created:
        log_product_event(db, event_name="user_blocked", user_id=user_id, properties={"blocked_user_id": blocked_user_id})
    db.commit()
    logger.info(f"[safety] user_id={user_id} blocked {blocked_user_id} created={created}")
    return {"status": "blocked", "blocked_user_id": blocked_user_id}


@router.post("/safety/unblock")
def safety_unblock(payload: BlockRequest, current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    blocked_user_id = payload.blocked_user_id.strip()
    removed = repo.remove_user_block(db, user_id_from(current_user), blocked_user_id)
    db.commit()
    return {"status": "unblocked", "blocked_user_id": blocked_user_id, "removed": removed}


@router.get("/safety/blocks")
def safety_blocks(current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    rows = repo.list_user_blocks(db, user_id_from(current_user))
    return {"blocks": [{"blocked_user_id": r.blocked_user_id, "created_at": r.created_at} for r in rows]}


@router.post("/safety/report")
def safety_report(payload: ReportRequest, current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    user_id = user_id_from(current_user)
    reason = payload.reason.strip()
    if not reason:
        raise HTTPException(status_code=400, detail="reason required")
    if payload.reported_user_id == user_id:
        raise HTTPException(status_code=400, detail="Cannot report yourself")
    if repo.get_profile(db, payload.reported_user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    report = repo.create_user_report(db, user_id, payload.reported_user_id, reason)
    log_product_event(db, event_name="user_reported", user_id=user_id, properties={"reason": reason})
    db.commit()
    return {"status": "reported", "report": {"id": report.id, "reported_user_id": report.reported_user_id, "reason": report.reason}}
