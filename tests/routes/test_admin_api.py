from talentvote.services import ledger


def test_round_results(admin_client, judges, make_round, make_contestant):
    round_a = make_round(round_number=1, is_active=True)
    shown = make_contestant(round_a, name="Shown", visible=True)
    hidden = make_contestant(round_a, name="Hidden", order=2)
    ledger.cast_vote(judges[0].id, shown.id, True)
    ledger.cast_vote(judges[1].id, shown.id, True)

    body = admin_client.get(f"/api/results/round/{round_a.id}").get_json()

    assert body["totalJudges"] == 3
    assert [row["contestant"]["id"] for row in body["contestants"]] == [shown.id]
    assert body["contestants"][0]["results"] == {
        "positiveCount": 2,
        "negativeCount": 0,
        "totalVotesCast": 2,
        "approvalPercentage": 67,
    }
    assert len(body["contestants"][0]["judgeVotes"]) == 3

    full = admin_client.get(f"/api/results/round/{round_a.id}?includeHidden=true").get_json()
    assert [row["contestant"]["id"] for row in full["contestants"]] == [shown.id, hidden.id]


def test_contestant_results(admin_client, judges, make_round, make_contestant):
    contestant = make_contestant(make_round(), visible=True)
    ledger.cast_vote(judges[0].id, contestant.id, False)

    body = admin_client.get(f"/api/results/contestant/{contestant.id}").get_json()

    assert body["results"]["negativeCount"] == 1
    assert body["results"]["approvalPercentage"] == 0


def test_results_are_admin_only(judge_client, make_round):
    round_a = make_round()

    assert judge_client.get(f"/api/results/round/{round_a.id}").status_code == 403


def test_stats(admin_client, judges, make_round, make_contestant):
    round_a = make_round(round_number=3, is_active=True)
    contestant = make_contestant(round_a)
    ledger.cast_vote(judges[0].id, contestant.id, True)

    body = admin_client.get("/api/stats").get_json()

    assert body["totalVotes"] == 1
    assert body["activeJudges"] == 3
    assert body["totalContestants"] == 1
    assert body["currentRound"] == 3


def test_list_users_never_exposes_password_hashes(admin_client, judges):
    body = admin_client.get("/api/users").get_json()

    assert len(body) == 4
    assert all("password_hash" not in user and "password" not in user for user in body)

    only_judges = admin_client.get("/api/users?role=judge").get_json()
    assert {user["role"] for user in only_judges} == {"judge"}


def test_update_user_cannot_change_role(admin_client, judge):
    response = admin_client.put(f"/api/users/{judge.id}", json={"role": "admin"})

    assert response.status_code == 400
    assert "role" in response.get_json()["fields"]


def test_delete_judge_removes_votes(admin_client, judges, make_round, make_contestant):
    contestant = make_contestant(make_round(), visible=True)
    ledger.cast_vote(judges[0].id, contestant.id, True)
    ledger.cast_vote(judges[1].id, contestant.id, True)

    response = admin_client.delete(f"/api/users/{judges[0].id}")

    assert response.status_code == 200
    assert response.get_json()["removedVotes"] == 1
    remaining = admin_client.get(f"/api/votes/contestant/{contestant.id}").get_json()
    assert [vote["userId"] for vote in remaining] == [judges[1].id]


def test_admin_cannot_delete_self(admin_client, admin_user):
    response = admin_client.delete(f"/api/users/{admin_user.id}")

    assert response.status_code == 400


def test_settings_round_trip(admin_client, judge_client):
    assert admin_client.get("/api/settings/poll_seconds").status_code == 404

    saved = admin_client.post("/api/settings", json={"key": "poll_seconds", "value": "3"})
    assert saved.status_code == 200

    assert admin_client.get("/api/settings/poll_seconds").get_json()["value"] == "3"
    assert judge_client.get("/api/settings/poll_seconds").status_code == 403
