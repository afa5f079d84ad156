from typing import Any

from fastapi import APIRouter, Depends

from .. import repo
from ..auth.deps import get_current_user
from ..deps import get_db, user_id_from
from ..schemas import (
    InviteOut,
    InviteRequest,
    InviteResult,
    MatchOut,
    ProfileOut,
    ReceivedInviteOut,
    RespondRequest,
)
from ..services import retry
from ..services.invites import InviteOutcome, respond_to_invite, submit_invite

router = APIRouter()


def _result(outcome: InviteOutcome) -> InviteResult:
    return InviteResult(
        is_match=outcome.is_match,
        invite=InviteOut.model_validate(outcome.invite) if outcome.invite is not None else None,
        match=MatchOut.model_validate(outcome.match) if outcome.match is not None else None,
        already_matched=outcome.conflict_resolved,
    )


@router.post("/invites", response_model=InviteResult)
def send_invite(payload: InviteRequest, current_user: dict[str, Any] = Depends(get_current_user)) -> InviteResult:
    acting = user_id_from(current_user)
    from_user_id = payload.from_user_id or acting
    return retry.run_with_retry(
        lambda db: _result(
            submit_invite(db, acting_user_id=acting, from_user_id=from_user_id, to_user_id=payload.to_user_id)
        )
    )


@router.post("/invites/{invite_id}/respond", response_model=InviteResult)
def respond_invite(
    invite_id: str,
    payload: RespondRequest,
    current_user: dict[str, Any] = Depends(get_current_user),
) -> InviteResult:
    acting = user_id_from(current_user)
    return retry.run_with_retry(
        lambda db: _result(
            respond_to_invite(db, acting_user_id=acting, invite_id=invite_id, decision=payload.decision)
        )
    )


@router.get("/invites/received")
def received_invites(current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    invites = repo.list_received_pending_invites(db, user_id_from(current_user))
    senders = repo.get_profiles(db, [i.from_user_id for i in invites])
    out = []
    for invite in invites:
        sender = senders.get(invite.from_user_id)
        if sender is None:
            continue
        out.append(
            ReceivedInviteOut(invite=InviteOut.model_validate(invite), sender=ProfileOut.model_validate(sender))
        )
    return {"invites": out}


@router.get("/invites/sent")
def sent_invites(current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    invites = repo.list_sent_invites(db, user_id_from(current_user))
    return {"invites": [InviteOut.model_validate(i) for i in invites]}
