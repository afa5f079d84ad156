from typing import Any

from ..config import (
    WEIGHT_BASE,
    WEIGHT_DIFFERENT_TRACK,
    WEIGHT_SAME_COHORT,
    WEIGHT_SAME_TRACK,
    WEIGHT_SHARED_INTEREST,
)


def _interest_set(values: Any) -> set[str]:
    if not isinstance(values, (list, tuple, set, frozenset)):
        return set()
    return {v for v in values if v}


def shared_interests(acting, candidate) -> set[str]:
    return _interest_set(acting.interests) & _interest_set(candidate.interests)


def compute_weight(candidate, acting, preferences=None) -> float:
    """Soft-preference weight for showing ``candidate`` to ``acting``.

    Starts at 1 and only ever adds, so every eligible candidate stays
    selectable. Missing preferences skip the cohort/track terms; the shared
    interest term always applies.
    """
    weight = WEIGHT_BASE
    if preferences is not None:
        if preferences.preferred_cohort == "same" and candidate.cohort_year == acting.cohort_year:
            weight += WEIGHT_SAME_COHORT
        if preferences.preferred_track == "same" and candidate.track == acting.track:
            weight += WEIGHT_SAME_TRACK
        elif preferences.preferred_track == "different" and candidate.track != acting.track:
            weight += WEIGHT_DIFFERENT_TRACK
    weight += WEIGHT_SHARED_INTEREST * len(shared_interests(acting, candidate))
    return weight


def weigh_candidates(candidates, acting, preferences=None) -> list[tuple[Any, float]]:
    return [(c, compute_weight(c, acting, preferences)) for c in candidates]
