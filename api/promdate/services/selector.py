import random
from typing import Any, Sequence

_system_random = random.SystemRandom()


def pick_weighted(weighted: Sequence[tuple[Any, float]], rng: random.Random | None = None) -> Any | None:
    if not weighted:
        return None
    rng = rng or _system_random
    total = sum(w for _, w in weighted)
    r = rng.random() * total
    running = 0.0
    for candidate, weight in weighted:
        running += weight
        if running > r:
            return candidate
    # float drift can leave r >= running on the final step
    return weighted[-1][0]


def rank_weighted(weighted: Sequence[tuple[Any, float]]) -> list[Any]:
    ordered = sorted(weighted, key=lambda item: (-item[1], str(item[0].user_id)))
    return [candidate for candidate, _ in ordered]
