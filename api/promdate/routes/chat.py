from typing import Any

from fastapi import APIRouter, Depends

from .. import repo
from ..auth.deps import get_current_user
from ..deps import get_db, user_id_from
from ..schemas import MatchOut, MatchWithPartnerOut, MessageIn, MessageOut, ProfileOut
from ..services.chat import list_match_messages, require_participant, send_message

router = APIRouter()


def _with_partner(db, match, user_id: str) -> MatchWithPartnerOut:
    partner = repo.get_profile(db, match.partner_of(user_id))
    latest = repo.latest_message(db, match.id)
    return MatchWithPartnerOut(
        match=MatchOut.model_validate(match),
        partner=ProfileOut.model_validate(partner) if partner else None,
        latest_message=MessageOut.model_validate(latest) if latest else None,
    )


@router.get("/matches")
def list_matches(current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    user_id = user_id_from(current_user)
    return {"matches": [_with_partner(db, m, user_id) for m in repo.list_matches(db, user_id)]}


@router.get("/matches/{match_id}", response_model=MatchWithPartnerOut)
def get_match(match_id: str, current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> MatchWithPartnerOut:
    user_id = user_id_from(current_user)
    match = require_participant(db, match_id, user_id)
    return _with_partner(db, match, user_id)


@router.get("/matches/{match_id}/messages")
def get_messages(match_id: str, current_user: dict[str, Any] = Depends(get_current_user), db=Depends(get_db)) -> dict[str, Any]:
    messages = list_match_messages(db, acting_user_id=user_id_from(current_user), match_id=match_id)
    return {"messages": [MessageOut.model_validate(m) for m in messages]}


@router.post("/matches/{match_id}/messages")
def post_message(
    match_id: str,
    payload: MessageIn,
    current_user: dict[str, Any] = Depends(get_current_user),
    db=Depends(get_db),
) -> dict[str, Any]:
    message = send_message(db, acting_user_id=user_id_from(current_user), match_id=match_id, content=payload.content)
    return {"message": MessageOut.model_validate(message)}
