import logging
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import delete

from .. import repo
from ..models import (
    COHORT_YEARS,
    DESIGNATED_ATTRIBUTES,
    BlockedUser,
    EventSettings,
    Invite,
    InvitePairLock,
    Match,
    Message,
    ProductEvent,
    Profile,
    SkippedProfile,
    UserPreferences,
    UserReport,
)

logger = logging.getLogger(__name__)

FIRST_NAMES = [
    "Aarav", "Maya", "Leo", "Zara", "Kabir", "Ira", "Noah", "Anika", "Ethan", "Sara",
    "Arjun", "Mia", "Rohan", "Ava", "Dev", "Nina", "Kian", "Tara", "Omar", "Lila",
]
TRACKS = ["Science", "Commerce", "Arts", "Engineering", "Design"]
INTERESTS = [
    "music", "dance", "football", "books", "movies", "gaming", "art", "travel",
    "cooking", "photography", "coding", "hiking", "theatre", "basketball", "anime",
]
BIO_PROMPTS = [
    "My ideal prom song is...",
    "Two truths and a lie:",
    "The way to my heart is...",
    None,
]
PREFERENCE_COHORT = {"same": 0.5, "any": 0.5}
PREFERENCE_TRACK = {"same": 0.35, "different": 0.25, "any": 0.4}


def _weighted_choice(rng: random.Random, weight_map: dict[str, float]) -> str:
    values = list(weight_map.keys())
    weights = [weight_map[v] for v in values]
    return rng.choices(values, weights=weights, k=1)[0]


def reset_all(db) -> None:
    for model in (Message, Match, Invite, InvitePairLock, SkippedProfile, BlockedUser, UserReport, ProductEvent, UserPreferences, Profile, EventSettings):
        db.execute(delete(model))


def seed_dummy_data(
    db,
    *,
    n_users: int = 40,
    organizations: list[str] | None = None,
    reset: bool = False,
    seed: int = 42,
    privileged_share: float = 0.1,
    event_in_days: int = 30,
) -> dict[str, Any]:
    rng = random.Random(seed)
    orgs = organizations or ["Springfield High"]
    if reset:
        reset_all(db)

    counts: dict[str, int] = {attr: 0 for attr in DESIGNATED_ATTRIBUTES}
    for i in range(n_users):
        attribute = DESIGNATED_ATTRIBUTES[i % 2]
        profile = repo.create_profile(
            db,
            user_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
            display_name=rng.choice(FIRST_NAMES),
            designated_attribute=attribute,
            organization=rng.choice(orgs),
            cohort_year=rng.choice(COHORT_YEARS),
            track=rng.choice(TRACKS),
            bio_prompt=rng.choice(BIO_PROMPTS),
            interests=rng.sample(INTERESTS, k=rng.randint(0, 5)),
            is_privileged=rng.random() < privileged_share,
        )
        if rng.random() < 0.7:
            repo.upsert_preferences(
                db,
                profile.user_id,
                preferred_cohort=_weighted_choice(rng, PREFERENCE_COHORT),
                preferred_track=_weighted_choice(rng, PREFERENCE_TRACK),
            )
        counts[attribute] += 1

    db.add(EventSettings(event_date=datetime.now(timezone.utc) + timedelta(days=event_in_days), is_active=True))
    db.commit()
    logger.info(f"[seed] created {n_users} profiles across {len(orgs)} organization(s)")
    return {"profiles": n_users, "organizations": len(orgs), **{f"profiles_{k}": v for k, v in counts.items()}}
