import logging
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy import or_, update

from ..config import MAX_DAILY_INVITES, QUOTA_TIMEZONE
from ..models import Profile

logger = logging.getLogger(__name__)


@dataclass
class QuotaDecision:
    allowed: bool
    remaining: int | None  # None means unlimited


def quota_date(now: datetime, tz_name: str = QUOTA_TIMEZONE) -> date:
    return now.astimezone(ZoneInfo(tz_name)).date()


def _is_stale(profile: Profile, today: date) -> bool:
    return profile.quota_reset_date is None or today > profile.quota_reset_date


def remaining_invites(profile: Profile, today: date) -> int | None:
    """Read-only view of the allowance, for display."""
    if profile.is_privileged:
        return None
    used = 0 if _is_stale(profile, today) else int(profile.invite_quota_used or 0)
    return max(0, MAX_DAILY_INVITES - used)


def check_quota(db, profile: Profile, today: date) -> QuotaDecision:
    if profile.is_privileged:
        return QuotaDecision(allowed=True, remaining=None)

    if _is_stale(profile, today):
        db.execute(
            update(Profile)
            .where(
                Profile.user_id == profile.user_id,
                or_(Profile.quota_reset_date.is_(None), Profile.quota_reset_date < today),
            )
            .values(invite_quota_used=0, quota_reset_date=today)
            .execution_options(synchronize_session=False)
        )
        db.refresh(profile)
        logger.debug(f"[quota] reset user_id={profile.user_id} date={today}")

    used = int(profile.invite_quota_used or 0)
    remaining = max(0, MAX_DAILY_INVITES - used)
    return QuotaDecision(allowed=used < MAX_DAILY_INVITES, remaining=remaining)


def consume_quota(db, profile: Profile, today: date) -> bool:
    """Atomically take one invite from the allowance.

    A conditional UPDATE on the owner's row; returns False when another request
    already used the last unit.
    """
    if profile.is_privileged:
        return True
    res = db.execute(
        update(Profile)
        .where(
            Profile.user_id == profile.user_id,
            Profile.quota_reset_date == today,
            Profile.invite_quota_used < MAX_DAILY_INVITES,
        )
        .values(invite_quota_used=Profile.invite_quota_used + 1)
        .execution_options(synchronize_session=False)
    )
    db.refresh(profile)
    return int(res.rowcount or 0) == 1
