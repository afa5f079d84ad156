from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, or_, select

from .config import MAX_INTERESTS
from .database import insert_ignore
from .models import (
    ACTIVE_INVITE_STATUSES,
    COHORT_YEARS,
    DESIGNATED_ATTRIBUTES,
    INVITE_PENDING,
    BlockedUser,
    EventSettings,
    Invite,
    Match,
    Message,
    Profile,
    SkippedProfile,
    UserPreferences,
    UserReport,
)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _normalize_interests(values: Any) -> list[str]:
    if not isinstance(values, (list, tuple, set)):
        return []
    out: list[str] = []
    for value in values:
        v = str(value or "").strip().lower()
        if v and v not in out:
            out.append(v)
    if len(out) > MAX_INTERESTS:
        raise ValueError(f"at most {MAX_INTERESTS} interests allowed")
    return out


def get_profile(db, user_id: str) -> Profile | None:
    return db.get(Profile, str(user_id), populate_existing=True)


def get_profiles(db, user_ids) -> dict[str, Profile]:
    ids = sorted({str(u) for u in user_ids})
    if not ids:
        return {}
    rows = db.execute(select(Profile).where(Profile.user_id.in_(ids))).scalars().all()
    return {p.user_id: p for p in rows}


def create_profile(
    db,
    *,
    user_id: str,
    display_name: str,
    designated_attribute: str,
    organization: str,
    cohort_year: str,
    track: str,
    bio_prompt: str | None = None,
    interests: list[str] | None = None,
    is_privileged: bool = False,
) -> Profile:
    if designated_attribute not in DESIGNATED_ATTRIBUTES:
        raise ValueError(f"designated_attribute must be one of: {', '.join(DESIGNATED_ATTRIBUTES)}")
    if cohort_year not in COHORT_YEARS:
        raise ValueError(f"cohort_year must be one of: {', '.join(COHORT_YEARS)}")
    profile = Profile(
        user_id=str(user_id),
        display_name=display_name.strip(),
        designated_attribute=designated_attribute,
        organization=organization.strip(),
        cohort_year=cohort_year,
        track=track.strip(),
        bio_prompt=(bio_prompt or "").strip() or None,
        interests=_normalize_interests(interests or []),
        invite_quota_used=0,
        quota_reset_date=None,
        is_privileged=is_privileged,
    )
    db.add(profile)
    db.flush()
    return profile


def get_preferences(db, user_id: str) -> UserPreferences | None:
    return db.get(UserPreferences, str(user_id), populate_existing=True)


def upsert_preferences(db, user_id: str, *, preferred_cohort: str = "any", preferred_track: str = "any") -> UserPreferences:
    if preferred_cohort not in {"same", "any"}:
        raise ValueError("preferred_cohort must be one of: same, any")
    if preferred_track not in {"same", "different", "any"}:
        raise ValueError("preferred_track must be one of: same, different, any")
    prefs = get_preferences(db, user_id)
    if prefs is None:
        prefs = UserPreferences(user_id=str(user_id))
        db.add(prefs)
    prefs.preferred_cohort = preferred_cohort
    prefs.preferred_track = preferred_track
    db.flush()
    return prefs


def record_skip_row(db, user_id: str, skipped_user_id: str) -> bool:
    return insert_ignore(db, SkippedProfile, {"user_id": str(user_id), "skipped_user_id": str(skipped_user_id)}) == 1


def create_user_block(db, user_id: str, blocked_user_id: str) -> bool:
    return insert_ignore(db, BlockedUser, {"user_id": str(user_id), "blocked_user_id": str(blocked_user_id)}) == 1


def remove_user_block(db, user_id: str, blocked_user_id: str) -> int:
    res = db.execute(
        delete(BlockedUser).where(
            BlockedUser.user_id == str(user_id),
            BlockedUser.blocked_user_id == str(blocked_user_id),
        )
    )
    return int(res.rowcount or 0)


def list_user_blocks(db, user_id: str) -> list[BlockedUser]:
    return list(
        db.execute(
            select(BlockedUser).where(BlockedUser.user_id == str(user_id)).order_by(BlockedUser.created_at.desc())
        ).scalars()
    )


def is_blocked_pair(db, user_a: str, user_b: str) -> bool:
    a, b = str(user_a), str(user_b)
    row = db.execute(
        select(BlockedUser.id)
        .where(
            or_(
                (BlockedUser.user_id == a) & (BlockedUser.blocked_user_id == b),
                (BlockedUser.user_id == b) & (BlockedUser.blocked_user_id == a),
            )
        )
        .limit(1)
    ).first()
    return row is not None


def create_user_report(db, reporter_id: str, reported_user_id: str, reason: str) -> UserReport:
    report = UserReport(reporter_id=str(reporter_id), reported_user_id=str(reported_user_id), reason=reason)
    db.add(report)
    db.flush()
    return report


def get_invite(db, invite_id: str) -> Invite | None:
    return db.get(Invite, str(invite_id), populate_existing=True)


def find_active_invite(db, from_user_id: str, to_user_id: str) -> Invite | None:
    return db.execute(
        select(Invite)
        .where(
            Invite.from_user_id == str(from_user_id),
            Invite.to_user_id == str(to_user_id),
            Invite.status.in_(ACTIVE_INVITE_STATUSES),
        )
        .limit(1)
        .execution_options(populate_existing=True)
    ).scalars().first()


def find_pending_invite(db, from_user_id: str, to_user_id: str) -> Invite | None:
    return db.execute(
        select(Invite)
        .where(
            Invite.from_user_id == str(from_user_id),
            Invite.to_user_id == str(to_user_id),
            Invite.status == INVITE_PENDING,
        )
        .limit(1)
        .execution_options(populate_existing=True)
    ).scalars().first()


def list_received_pending_invites(db, user_id: str) -> list[Invite]:
    return list(
        db.execute(
            select(Invite)
            .where(Invite.to_user_id == str(user_id), Invite.status == INVITE_PENDING)
            .order_by(Invite.created_at.desc(), Invite.id)
            .execution_options(populate_existing=True)
        ).scalars()
    )


def list_sent_invites(db, user_id: str) -> list[Invite]:
    return list(
        db.execute(
            select(Invite)
            .where(Invite.from_user_id == str(user_id))
            .order_by(Invite.created_at.desc(), Invite.id)
            .execution_options(populate_existing=True)
        ).scalars()
    )


def get_match(db, match_id: str) -> Match | None:
    return db.get(Match, str(match_id), populate_existing=True)


def find_match_for_pair(db, user1_id: str, user2_id: str) -> Match | None:
    return db.execute(
        select(Match)
        .where(Match.user1_id == str(user1_id), Match.user2_id == str(user2_id))
        .execution_options(populate_existing=True)
    ).scalars().first()


def list_matches(db, user_id: str) -> list[Match]:
    uid = str(user_id)
    return list(
        db.execute(
            select(Match).where(or_(Match.user1_id == uid, Match.user2_id == uid)).order_by(Match.created_at.desc(), Match.id)
        ).scalars()
    )


def list_messages(db, match_id: str) -> list[Message]:
    return list(
        db.execute(
            select(Message).where(Message.match_id == str(match_id)).order_by(Message.created_at.asc(), Message.id)
        ).scalars()
    )


def latest_message(db, match_id: str) -> Message | None:
    return db.execute(
        select(Message).where(Message.match_id == str(match_id)).order_by(Message.created_at.desc()).limit(1)
        .execution_options(populate_existing=True)
    ).scalars().first()


def create_message(db, match_id: str, sender_id: str, content: str) -> Message:
    msg = Message(match_id=str(match_id), sender_id=str(sender_id), content=content, created_at=_now_utc())
    db.add(msg)
    db.flush()
    return msg


def get_active_event_settings(db) -> EventSettings | None:
    return db.execute(
        select(EventSettings).where(EventSettings.is_active.is_(True)).order_by(EventSettings.created_at.desc()).limit(1)
        .execution_options(populate_existing=True)
    ).scalars().first()
