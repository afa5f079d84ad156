from datetime import datetime, timezone

from promdate.models import GROUP_A, GROUP_B
from promdate.services.quota import quota_date


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_requests_without_token_are_rejected(client):
    res = client.get("/candidates/next")
    assert res.status_code == 401
    assert res.json()["detail"]["message"] == "unauthorized"

    res = client.get("/candidates/next", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_invite_accept_chat_flow(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)

    res = client.get("/candidates/next", headers=auth_headers(a.user_id))
    assert res.status_code == 200
    assert res.json()["candidate"]["user_id"] == b.user_id

    res = client.post("/invites", json={"to_user_id": b.user_id}, headers=auth_headers(a.user_id))
    assert res.status_code == 200
    body = res.json()
    assert body["is_match"] is False
    invite_id = body["invite"]["id"]

    # invited profile drops out of the inviter's deck
    res = client.get("/candidates/next", headers=auth_headers(a.user_id))
    assert res.json()["candidate"] is None
    assert res.json()["message"]

    res = client.get("/invites/received", headers=auth_headers(b.user_id))
    received = res.json()["invites"]
    assert [r["invite"]["id"] for r in received] == [invite_id]
    assert received[0]["sender"]["user_id"] == a.user_id

    res = client.get("/invites/sent", headers=auth_headers(a.user_id))
    assert [i["id"] for i in res.json()["invites"]] == [invite_id]

    res = client.post(f"/invites/{invite_id}/respond", json={"decision": "accept"}, headers=auth_headers(b.user_id))
    assert res.status_code == 200
    body = res.json()
    assert body["is_match"] is True
    match_id = body["match"]["id"]

    res = client.get("/matches", headers=auth_headers(a.user_id))
    matches = res.json()["matches"]
    assert len(matches) == 1
    assert matches[0]["partner"]["user_id"] == b.user_id

    res = client.post(f"/matches/{match_id}/messages", json={"content": "see you at prom"}, headers=auth_headers(a.user_id))
    assert res.status_code == 200

    res = client.get(f"/matches/{match_id}/messages", headers=auth_headers(b.user_id))
    assert [m["content"] for m in res.json()["messages"]] == ["see you at prom"]

    res = client.get(f"/matches/{match_id}", headers=auth_headers(b.user_id))
    assert res.json()["latest_message"]["content"] == "see you at prom"


def test_error_mapping(client, db, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)
    c = make_profile(GROUP_B)

    res = client.post("/invites", json={"to_user_id": "nobody"}, headers=auth_headers(a.user_id))
    assert res.status_code == 404
    assert res.json()["code"] == "not_found"

    res = client.post(
        "/invites",
        json={"from_user_id": b.user_id, "to_user_id": a.user_id},
        headers=auth_headers(a.user_id),
    )
    assert res.status_code == 403
    assert res.json()["code"] == "unauthorized"

    res = client.post("/invites", json={"to_user_id": c.user_id}, headers=auth_headers(b.user_id))
    assert res.status_code == 409
    assert res.json()["code"] == "invalid_state"

    a.invite_quota_used = 5
    a.quota_reset_date = quota_date(datetime.now(timezone.utc))
    db.commit()
    res = client.post("/invites", json={"to_user_id": b.user_id}, headers=auth_headers(a.user_id))
    assert res.status_code == 429
    assert res.json()["code"] == "quota_exceeded"
    assert res.json()["remaining"] == 0


def test_respond_by_wrong_user_is_forbidden(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)
    invite_id = client.post("/invites", json={"to_user_id": b.user_id}, headers=auth_headers(a.user_id)).json()["invite"]["id"]

    res = client.post(f"/invites/{invite_id}/respond", json={"decision": "accept"}, headers=auth_headers(a.user_id))
    assert res.status_code == 403

    res = client.post(f"/invites/{invite_id}/respond", json={"decision": "later"}, headers=auth_headers(b.user_id))
    assert res.status_code == 422


def test_profile_me_reports_remaining_invites(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)
    client.post("/invites", json={"to_user_id": b.user_id}, headers=auth_headers(a.user_id))

    res = client.get("/profile/me", headers=auth_headers(a.user_id))
    assert res.status_code == 200
    assert res.json()["remaining_invites"] == 4

    res = client.get("/profile/me", headers=auth_headers("nobody"))
    assert res.status_code == 404


def test_event_countdown_without_settings(client):
    res = client.get("/event")
    assert res.status_code == 200
    assert res.json()["is_active"] is False
