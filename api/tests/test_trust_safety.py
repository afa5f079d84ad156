from promdate.models import GROUP_A, GROUP_B


def _candidate_ids(client, headers):
    return [c["user_id"] for c in client.get("/candidates", headers=headers).json()["candidates"]]


def test_block_hides_both_sides_until_unblocked(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)
    c = make_profile(GROUP_B)

    res = client.post("/safety/block", json={"blocked_user_id": b.user_id}, headers=auth_headers(a.user_id))
    assert res.status_code == 200
    assert res.json()["status"] == "blocked"

    assert _candidate_ids(client, auth_headers(a.user_id)) == [c.user_id]
    assert _candidate_ids(client, auth_headers(b.user_id)) == []

    res = client.get("/safety/blocks", headers=auth_headers(a.user_id))
    assert [r["blocked_user_id"] for r in res.json()["blocks"]] == [b.user_id]

    res = client.post("/invites", json={"to_user_id": a.user_id}, headers=auth_headers(b.user_id))
    assert res.status_code == 409

    res = client.post("/safety/unblock", json={"blocked_user_id": b.user_id}, headers=auth_headers(a.user_id))
    assert res.json()["removed"] == 1
    assert sorted(_candidate_ids(client, auth_headers(a.user_id))) == sorted([b.user_id, c.user_id])


def test_block_validation(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)

    res = client.post("/safety/block", json={"blocked_user_id": a.user_id}, headers=auth_headers(a.user_id))
    assert res.status_code == 400

    res = client.post("/safety/block", json={"blocked_user_id": "nobody"}, headers=auth_headers(a.user_id))
    assert res.status_code == 404


def test_skip_removes_candidate(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)

    res = client.post(f"/candidates/{b.user_id}/skip", headers=auth_headers(a.user_id))
    assert res.status_code == 200
    assert res.json() == {"status": "skipped", "skipped_user_id": b.user_id, "created": True}

    res = client.post(f"/candidates/{b.user_id}/skip", headers=auth_headers(a.user_id))
    assert res.json()["created"] is False
    assert _candidate_ids(client, auth_headers(a.user_id)) == []

    res = client.post(f"/candidates/{a.user_id}/skip", headers=auth_headers(a.user_id))
    assert res.status_code == 409


def test_report_user(client, make_profile, auth_headers):
    a = make_profile(GROUP_A)
    b = make_profile(GROUP_B)

    res = client.post(
        "/safety/report",
        json={"reported_user_id": b.user_id, "reason": "inappropriate"},
        headers=auth_headers(a.user_id),
    )
    assert res.status_code == 200
    assert res.json()["report"]["reported_user_id"] == b.user_id

    res = client.post(
        "/safety/report",
        json={"reported_user_id": a.user_id, "reason": "self"},
        headers=auth_headers(a.user_id),
    )
    assert res.status_code == 400
