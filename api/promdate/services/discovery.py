import logging
import random

from .. import repo
from ..errors import InvalidState, NotFound, Unauthorized
from ..models import Profile
from .candidates import fetch_candidate_pool
from .events import log_product_event
from .exclusion import build_exclusion_set
from .selector import pick_weighted, rank_weighted
from .weighting import weigh_candidates

logger = logging.getLogger(__name__)


def _weighted_pool(db, user_id: str):
    acting = repo.get_profile(db, user_id)
    if acting is None:
        raise NotFound("Profile not found")
    exclusion = build_exclusion_set(db, acting.user_id)
    pool = fetch_candidate_pool(db, acting, exclusion)
    preferences = repo.get_preferences(db, acting.user_id)
    return weigh_candidates(pool, acting, preferences)


def get_next_candidate(db, user_id: str, rng: random.Random | None = None) -> Profile | None:
    weighted = _weighted_pool(db, str(user_id))
    if not weighted:
        logger.debug(f"[discovery] no candidates left for user_id={user_id}")
        return None
    return pick_weighted(weighted, rng)


def list_all_candidates(db, user_id: str) -> list[Profile]:
    return rank_weighted(_weighted_pool(db, str(user_id)))


def record_skip(db, *, acting_user_id: str, user_id: str, skipped_user_id: str) -> bool:
    """Append a skip; returns False when the pair was already skipped."""
    if str(user_id) != str(acting_user_id):
        logger.warning(f"[discovery] actor {acting_user_id} tried to skip on behalf of {user_id}")
        raise Unauthorized("You can only skip profiles as yourself")
    if str(user_id) == str(skipped_user_id):
        raise InvalidState("You cannot skip yourself")
    if repo.get_profile(db, skipped_user_id) is None:
        raise NotFound("Skipped profile not found")

    created = repo.record_skip_row(db, user_id, skipped_user_id)
    if created:
        log_product_event(
            db,
            event_name="profile_skipped",
            user_id=str(user_id),
            properties={"skipped_user_id": str(skipped_user_id)},
        )
    db.commit()
    return created
