from typing import Any

from fastapi import APIRouter, Depends

from ..auth.deps import get_current_user
from ..deps import user_id_from
from ..schemas import CandidateListResponse, CandidateResponse, ProfileOut, SkipResponse
from ..services import retry
from ..services.discovery import get_next_candidate, list_all_candidates, record_skip

router = APIRouter()

NO_MORE_CANDIDATES = "You've seen everyone available! Check back later for new faces."


@router.get("/candidates/next", response_model=CandidateResponse)
def next_candidate(current_user: dict[str, Any] = Depends(get_current_user)) -> CandidateResponse:
    user_id = user_id_from(current_user)

    def _op(db):
        profile = get_next_candidate(db, user_id)
        return ProfileOut.model_validate(profile) if profile else None

    candidate = retry.run_with_retry(_op)
    if candidate is None:
        return CandidateResponse(candidate=None, message=NO_MORE_CANDIDATES)
    return CandidateResponse(candidate=candidate)


@router.get("/candidates", response_model=CandidateListResponse)
def all_candidates(current_user: dict[str, Any] = Depends(get_current_user)) -> CandidateListResponse:
    user_id = user_id_from(current_user)
    candidates = retry.run_with_retry(
        lambda db: [ProfileOut.model_validate(p) for p in list_all_candidates(db, user_id)]
    )
    return CandidateListResponse(candidates=candidates)


@router.post("/candidates/{skipped_user_id}/skip", response_model=SkipResponse)
def skip_candidate(skipped_user_id: str, current_user: dict[str, Any] = Depends(get_current_user)) -> SkipResponse:
    user_id = user_id_from(current_user)
    created = retry.run_with_retry(
        lambda db: record_skip(db, acting_user_id=user_id, user_id=user_id, skipped_user_id=skipped_user_id)
    )
    return SkipResponse(skipped_user_id=skipped_user_id, created=created)
