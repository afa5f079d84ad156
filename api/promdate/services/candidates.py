from collections.abc import Iterable

from sqlalchemy import select

from ..models import GROUP_A, GROUP_B, Profile


def opposite_attribute(value: str) -> str:
    if value == GROUP_A:
        return GROUP_B
    if value == GROUP_B:
        return GROUP_A
    raise ValueError(f"unknown designated_attribute: {value!r}")


def is_eligible_pair(acting: Profile, candidate: Profile) -> bool:
    return (
        acting.user_id != candidate.user_id
        and candidate.designated_attribute == opposite_attribute(acting.designated_attribute)
        and candidate.organization == acting.organization
    )


def fetch_candidate_pool(db, acting: Profile, exclusion: Iterable[str]) -> list[Profile]:
    excluded = set(exclusion)
    excluded.add(acting.user_id)
    stmt = (
        select(Profile)
        .where(
            Profile.designated_attribute == opposite_attribute(acting.designated_attribute),
            Profile.organization == acting.organization,
            Profile.user_id.not_in(sorted(excluded)),
        )
        .order_by(Profile.user_id)
    )
    return list(db.execute(stmt).scalars().all())
