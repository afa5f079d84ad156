from datetime import date, datetime, timedelta, timezone

from promdate.services.quota import check_quota, consume_quota, quota_date, remaining_invites

TODAY = date(2026, 10, 19)


def test_quota_date_uses_configured_zone():
    late_local = datetime(2026, 10, 20, 1, 0, tzinfo=timezone(timedelta(hours=5)))
    assert quota_date(late_local) == date(2026, 10, 19)
    assert quota_date(datetime(2026, 10, 19, 23, 59, tzinfo=timezone.utc)) == date(2026, 10, 19)


def test_first_check_starts_today_window(db, make_profile):
    profile = make_profile()
    decision = check_quota(db, profile, TODAY)
    assert decision.allowed is True
    assert decision.remaining == 5
    assert profile.quota_reset_date == TODAY
    assert profile.invite_quota_used == 0


def test_exhausted_quota_is_denied(db, make_profile):
    profile = make_profile()
    profile.invite_quota_used = 5
    profile.quota_reset_date = TODAY
    db.commit()

    decision = check_quota(db, profile, TODAY)
    assert decision.allowed is False
    assert decision.remaining == 0


def test_stale_window_resets_lazily(db, make_profile):
    profile = make_profile()
    profile.invite_quota_used = 5
    profile.quota_reset_date = TODAY - timedelta(days=1)
    db.commit()

    assert remaining_invites(profile, TODAY) == 5
    decision = check_quota(db, profile, TODAY)
    assert decision.allowed is True
    assert profile.invite_quota_used == 0
    assert profile.quota_reset_date == TODAY


def test_consume_stops_at_daily_limit(db, make_profile):
    profile = make_profile()
    check_quota(db, profile, TODAY)
    results = [consume_quota(db, profile, TODAY) for _ in range(6)]
    assert results == [True] * 5 + [False]
    assert profile.invite_quota_used == 5
    assert remaining_invites(profile, TODAY) == 0


def test_privileged_user_is_never_limited(db, make_profile):
    profile = make_profile(is_privileged=True)
    profile.invite_quota_used = 5
    profile.quota_reset_date = TODAY
    db.commit()

    decision = check_quota(db, profile, TODAY)
    assert decision.allowed is True
    assert decision.remaining is None
    assert consume_quota(db, profile, TODAY) is True
    assert profile.invite_quota_used == 5
    assert remaining_invites(profile, TODAY) is None
