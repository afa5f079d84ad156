from types import SimpleNamespace

from promdate.services.weighting import compute_weight, shared_interests, weigh_candidates


def _profile(user_id="u", cohort_year="3rd", track="Science", interests=None):
    return SimpleNamespace(user_id=user_id, cohort_year=cohort_year, track=track, interests=interests or [])


def _prefs(cohort="any", track="any"):
    return SimpleNamespace(preferred_cohort=cohort, preferred_track=track)


def test_base_weight_without_preferences_or_shared_interests():
    assert compute_weight(_profile(interests=["chess"]), _profile(interests=["music"])) == 1.0


def test_shared_interests_apply_without_preferences():
    acting = _profile(interests=["music", "art", "travel"])
    candidate = _profile(interests=["music", "art", "coding"])
    assert shared_interests(acting, candidate) == {"music", "art"}
    assert compute_weight(candidate, acting) == 1.0 + 1.5 * 2


def test_interests_compare_exactly_as_stored():
    acting = _profile(interests=["Music"])
    candidate = _profile(interests=["music"])
    assert shared_interests(acting, candidate) == set()
    assert compute_weight(candidate, acting) == 1.0


def test_each_extra_shared_interest_adds_one_and_a_half():
    acting = _profile(interests=["music", "art", "dance"])
    one = compute_weight(_profile(interests=["music"]), acting)
    two = compute_weight(_profile(interests=["music", "art"]), acting)
    assert two - one == 1.5


def test_same_cohort_preference_adds_bonus_only_on_match():
    acting = _profile(cohort_year="3rd")
    assert compute_weight(_profile(cohort_year="3rd"), acting, _prefs(cohort="same")) == 3.0
    assert compute_weight(_profile(cohort_year="1st"), acting, _prefs(cohort="same")) == 1.0


def test_track_preferences():
    acting = _profile(track="Science")
    same = _profile(track="Science")
    other = _profile(track="Arts")

    assert compute_weight(same, acting, _prefs(track="same")) == 3.0
    assert compute_weight(other, acting, _prefs(track="same")) == 1.0
    assert compute_weight(other, acting, _prefs(track="different")) == 2.0
    assert compute_weight(same, acting, _prefs(track="different")) == 1.0
    assert compute_weight(same, acting, _prefs(track="any")) == 1.0


def test_all_terms_combine():
    acting = _profile(cohort_year="2nd", track="Arts", interests=["dance"])
    candidate = _profile(cohort_year="2nd", track="Arts", interests=["dance"])
    assert compute_weight(candidate, acting, _prefs(cohort="same", track="same")) == 1.0 + 2 + 2 + 1.5


def test_weights_never_drop_below_base():
    acting = _profile(interests=[])
    pool = [_profile(user_id=str(i), cohort_year="1st", track="Arts") for i in range(5)]
    weighted = weigh_candidates(pool, acting, _prefs(cohort="same", track="same"))
    assert [w for _, w in weighted] == [1.0] * 5
    assert [c.user_id for c, _ in weighted] == ["0", "1", "2", "3", "4"]
