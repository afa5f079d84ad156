import random
from types import SimpleNamespace

from promdate.services.selector import pick_weighted, rank_weighted


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def _c(user_id):
    return SimpleNamespace(user_id=user_id)


def test_empty_pool_returns_none():
    assert pick_weighted([], FixedRandom(0.5)) is None


def test_cumulative_walk_picks_by_draw():
    a, b = _c("a"), _c("b")
    weighted = [(a, 1.0), (b, 3.0)]
    assert pick_weighted(weighted, FixedRandom(0.0)) is a
    assert pick_weighted(weighted, FixedRandom(0.2)) is a
    assert pick_weighted(weighted, FixedRandom(0.25)) is b
    assert pick_weighted(weighted, FixedRandom(0.99)) is b


def test_draw_at_total_falls_back_to_last_candidate():
    a, b = _c("a"), _c("b")
    assert pick_weighted([(a, 1.0), (b, 1.0)], FixedRandom(1.0)) is b


def test_seeded_rng_follows_weights():
    a, b = _c("a"), _c("b")
    rng = random.Random(7)
    picks = [pick_weighted([(a, 1.0), (b, 3.0)], rng).user_id for _ in range(4000)]
    share_b = picks.count("b") / len(picks)
    assert 0.68 < share_b < 0.82


def test_every_candidate_is_reachable():
    pool = [(_c(str(i)), 1.0) for i in range(4)]
    rng = random.Random(1)
    seen = {pick_weighted(pool, rng).user_id for _ in range(500)}
    assert seen == {"0", "1", "2", "3"}


def test_rank_orders_by_weight_then_user_id():
    weighted = [(_c("c"), 1.0), (_c("b"), 4.0), (_c("a"), 1.0), (_c("d"), 2.5)]
    assert [c.user_id for c in rank_weighted(weighted)] == ["b", "d", "a", "c"]
