from sqlalchemy import or_, select

from ..models import BlockedUser, Invite, Match, SkippedProfile


def build_exclusion_set(db, user_id: str) -> set[str]:
    """Every user id that must never be offered to ``user_id`` as a candidate.

    Covers the user themself, anyone they share an invite with (any status or
    direction), their matches, the profiles they skipped, and blocks in either
    direction.
    """
    uid = str(user_id)
    excluded: set[str] = {uid}

    invites = db.execute(
        select(Invite.from_user_id, Invite.to_user_id).where(
            or_(Invite.from_user_id == uid, Invite.to_user_id == uid)
        )
    ).all()
    for from_id, to_id in invites:
        excluded.add(str(from_id))
        excluded.add(str(to_id))

    matches = db.execute(
        select(Match.user1_id, Match.user2_id).where(or_(Match.user1_id == uid, Match.user2_id == uid))
    ).all()
    for a, b in matches:
        excluded.add(str(a))
        excluded.add(str(b))

    skipped = db.execute(select(SkippedProfile.skipped_user_id).where(SkippedProfile.user_id == uid)).scalars()
    excluded.update(str(s) for s in skipped)

    blocks = db.execute(
        select(BlockedUser.user_id, BlockedUser.blocked_user_id).where(
            or_(BlockedUser.user_id == uid, BlockedUser.blocked_user_id == uid)
        )
    ).all()
    for blocker, blocked in blocks:
        excluded.add(str(blocked) if str(blocker) == uid else str(blocker))

    return excluded
