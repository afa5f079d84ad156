"""
Invite/match operations.

Every write for a pair of users runs in one transaction that starts by locking
the pair's ``invite_pair_lock`` row, so two requests touching the same pair
(double submit, or both users inviting each other at once) are serialised
while unrelated pairs proceed in parallel. The unique constraints on active
invites and on the canonical match pair back this up: a match insert that hits
an existing row is treated as "already matched".
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from .. import repo
from ..database import insert_ignore
from ..errors import InvalidState, NotFound, QuotaExceeded, Unauthorized
from ..models import (
    INVITE_ACCEPTED,
    INVITE_PENDING,
    Invite,
    InvitePairLock,
    Match,
    canonical_pair,
    pair_key,
)
from .candidates import is_eligible_pair
from .events import log_product_event
from .notifications import MatchCreated, Notifier, notifier as default_notifier
from .quota import check_quota, consume_quota, quota_date
from .state_machine import ACTION_ACCEPT, ACTION_INVITE, ACTION_REJECT, transition_invite

logger = logging.getLogger(__name__)

DECISION_ACCEPT = "accept"
DECISION_REJECT = "reject"


@dataclass
class InviteOutcome:
    is_match: bool
    invite: Invite | None = None
    match: Match | None = None
    conflict_resolved: bool = False
    match_created: bool = False


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _lock_pair(db, user_a: str, user_b: str, now: datetime) -> None:
    key = pair_key(user_a, user_b)
    insert_ignore(db, InvitePairLock, {"pair_key": key, "touched_at": now})
    # the UPDATE takes the row lock and holds it until commit/rollback
    db.execute(
        update(InvitePairLock)
        .where(InvitePairLock.pair_key == key)
        .values(touched_at=now)
        .execution_options(synchronize_session=False)
    )


def _set_invite_status(db, invite: Invite, expected: str, new_status: str, now: datetime) -> None:
    res = db.execute(
        update(Invite)
        .where(Invite.id == invite.id, Invite.status == expected)
        .values(status=new_status, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    if int(res.rowcount or 0) != 1:
        raise InvalidState(f"invite {invite.id} is no longer {expected}")
    db.refresh(invite)


def _accept_edge(db, from_user_id: str, to_user_id: str, now: datetime) -> Invite:
    """Make the from->to edge reflect acceptance, creating it if needed."""
    edge = repo.find_active_invite(db, from_user_id, to_user_id)
    if edge is None:
        edge = Invite(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            status=INVITE_ACCEPTED,
            created_at=now,
            updated_at=now,
        )
        db.add(edge)
        db.flush()
        return edge
    if edge.status == INVITE_PENDING:
        _set_invite_status(db, edge, INVITE_PENDING, INVITE_ACCEPTED, now)
    return edge


def _complete_match(db, inbound: Invite, now: datetime) -> tuple[Match, bool, Invite]:
    """Accept ``inbound`` (other -> acting), mirror it, and create the match row.

    Returns (match, created, acting->other edge).
    """
    acting_id = inbound.to_user_id
    other_id = inbound.from_user_id

    new_status = transition_invite(inbound.status, ACTION_ACCEPT)
    _set_invite_status(db, inbound, INVITE_PENDING, new_status, now)
    outward = _accept_edge(db, acting_id, other_id, now)

    user1_id, user2_id = canonical_pair(acting_id, other_id)
    inserted = insert_ignore(db, Match, {"user1_id": user1_id, "user2_id": user2_id, "created_at": now})
    match = repo.find_match_for_pair(db, user1_id, user2_id)
    if match is None:
        raise InvalidState("match row missing after insert")
    if inserted:
        log_product_event(
            db,
            event_name="match_created",
            user_id=acting_id,
            properties={"match_id": match.id, "partner_id": other_id},
        )
    else:
        logger.warning(f"[invite] match already existed for pair {user1_id}:{user2_id}; treating as matched")
    return match, bool(inserted), outward


def _commit_match(db, outcome: InviteOutcome, notify: Notifier | None) -> InviteOutcome:
    user1_id, user2_id = outcome.match.user1_id, outcome.match.user2_id
    db.commit()

    if outcome.match_created:
        logger.info(f"[invite] match created match_id={outcome.match.id} pair={user1_id}:{user2_id}")
        (notify or default_notifier).publish(
            MatchCreated(
                match_id=outcome.match.id,
                user1_id=user1_id,
                user2_id=user2_id,
                created_at=outcome.match.created_at,
            )
        )
    return outcome


def submit_invite(
    db,
    *,
    acting_user_id: str,
    from_user_id: str,
    to_user_id: str,
    now: datetime | None = None,
    notify: Notifier | None = None,
) -> InviteOutcome:
    now = now or _now_utc()
    from_id, to_id = str(from_user_id), str(to_user_id)

    if from_id != str(acting_user_id):
        logger.warning(f"[invite] actor {acting_user_id} tried to invite on behalf of {from_id}")
        raise Unauthorized("You can only send invites as yourself")
    if from_id == to_id:
        raise InvalidState("You cannot invite yourself")

    acting = repo.get_profile(db, from_id)
    if acting is None:
        raise NotFound("Profile not found")
    target = repo.get_profile(db, to_id)
    if target is None:
        raise NotFound("Invited profile not found")
    if not is_eligible_pair(acting, target):
        raise InvalidState("This profile is not an eligible candidate")
    if repo.is_blocked_pair(db, from_id, to_id):
        raise InvalidState("Invites are not possible between blocked users")

    _lock_pair(db, from_id, to_id, now)

    existing = repo.find_active_invite(db, from_id, to_id)
    if existing is not None:
        if transition_invite(existing.status, ACTION_INVITE) == INVITE_ACCEPTED:
            match = repo.find_match_for_pair(db, *canonical_pair(from_id, to_id))
            db.commit()
            return InviteOutcome(is_match=match is not None, invite=existing, match=match)
        db.commit()
        logger.debug(f"[invite] duplicate pending invite {from_id}->{to_id} ignored")
        return InviteOutcome(is_match=False, invite=existing)

    today = quota_date(now)
    decision = check_quota(db, acting, today)
    if not decision.allowed:
        db.rollback()
        raise QuotaExceeded(remaining=0)

    reciprocal = repo.find_pending_invite(db, to_id, from_id)
    if reciprocal is not None:
        match, created, outward = _complete_match(db, reciprocal, now)
        outcome = InviteOutcome(
            is_match=True,
            invite=outward,
            match=match,
            conflict_resolved=not created,
            match_created=created,
        )
        return _commit_match(db, outcome, notify)

    invite = Invite(
        from_user_id=from_id,
        to_user_id=to_id,
        status=transition_invite(None, ACTION_INVITE),
        created_at=now,
        updated_at=now,
    )
    db.add(invite)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        existing = repo.find_active_invite(db, from_id, to_id)
        if existing is None:
            raise
        return InviteOutcome(is_match=False, invite=existing)

    # invite first, then the counter, in the same transaction
    if not consume_quota(db, acting, today):
        db.rollback()
        raise QuotaExceeded(remaining=0)
    log_product_event(db, event_name="invite_sent", user_id=from_id, properties={"to_user_id": to_id})
    db.commit()
    logger.info(f"[invite] pending invite {from_id}->{to_id} invite_id={invite.id}")
    return InviteOutcome(is_match=False, invite=invite)


def respond_to_invite(
    db,
    *,
    acting_user_id: str,
    invite_id: str,
    decision: str,
    now: datetime | None = None,
    notify: Notifier | None = None,
) -> InviteOutcome:
    now = now or _now_utc()
    if decision not in {DECISION_ACCEPT, DECISION_REJECT}:
        raise InvalidState("decision must be one of: accept, reject")

    invite = repo.get_invite(db, invite_id)
    if invite is None:
        raise NotFound("Invite not found")
    if invite.to_user_id != str(acting_user_id):
        logger.warning(f"[invite] actor {acting_user_id} tried to respond to invite {invite_id}")
        raise Unauthorized("Only the invited user can respond to this invite")

    _lock_pair(db, invite.from_user_id, invite.to_user_id, now)
    db.refresh(invite)
    if invite.status != INVITE_PENDING:
        db.rollback()
        raise InvalidState(f"Invite is already {invite.status}")

    if decision == DECISION_REJECT:
        _set_invite_status(db, invite, INVITE_PENDING, transition_invite(invite.status, ACTION_REJECT), now)
        log_product_event(
            db,
            event_name="invite_rejected",
            user_id=invite.to_user_id,
            properties={"invite_id": invite.id, "from_user_id": invite.from_user_id},
        )
        db.commit()
        return InviteOutcome(is_match=False, invite=invite)

    if repo.is_blocked_pair(db, invite.from_user_id, invite.to_user_id):
        db.rollback()
        raise InvalidState("Invites are not possible between blocked users")

    match, created, _ = _complete_match(db, invite, now)
    outcome = InviteOutcome(
        is_match=True,
        invite=invite,
        match=match,
        conflict_resolved=not created,
        match_created=created,
    )
    return _commit_match(db, outcome, notify)

