from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from .. import repo
from ..auth.deps import get_current_user
from ..deps import get_db, user_id_from
from ..schemas import EventCountdownOut, MyProfileOut
from ..services.quota import quota_date, remaining_invites

router = APIRouter()


@router.get("/profile/me", response_model=MyProfileOut)
def get_my_profile(current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> MyProfileOut:
    profile = repo.get_profile(db, user_id_from(current_user))
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    out = MyProfileOut.model_validate(profile)
    out.remaining_invites = remaining_invites(profile, quota_date(datetime.now(timezone.utc)))
    return out


@router.get("/event", response_model=EventCountdownOut)
def get_event_countdown(db=Depends(get_db)) -> EventCountdownOut:
    settings = repo.get_active_event_settings(db)
    if settings is None:
        return EventCountdownOut(event_date=None, is_active=False)

    event_date = settings.event_date
    if event_date.tzinfo is None:
        event_date = event_date.replace(tzinfo=timezone.utc)
    remaining = int((event_date - datetime.now(timezone.utc)).total_seconds())
    if remaining <= 0:
        return EventCountdownOut(event_date=event_date, is_active=False)
    return EventCountdownOut(
        event_date=event_date,
        is_active=True,
        days=remaining // 86400,
        hours=(remaining // 3600) % 24,
        minutes=(remaining // 60) % 60,
        seconds=remaining % 60,
    )
