def _payload(round_id, **overrides):
    payload = {
        "name": "Tomas",
        "className": "8.C",
        "age": 14,
        "category": "Magic",
        "roundId": round_id,
        "order": 2,
    }
    payload.update(overrides)
    return payload


def test_admin_creates_contestant(admin_client, make_round):
    round_a = make_round()

    response = admin_client.post("/api/contestants", json=_payload(round_a.id))

    assert response.status_code == 201
    body = response.get_json()
    assert body["className"] == "8.C"
    assert body["isVisibleToJudges"] is False
    assert body["roundId"] == round_a.id


def test_create_contestant_field_errors(admin_client, make_round):
    round_a = make_round()

    response = admin_client.post("/api/contestants", json=_payload(round_a.id, age=4))

    assert response.status_code == 400
    assert "age" in response.get_json()["fields"]


def test_create_contestant_in_missing_round(admin_client):
    response = admin_client.post("/api/contestants", json=_payload(555))

    assert response.status_code == 404


def test_judges_only_see_visible_contestants(
    admin_client, judge_client, make_round, make_contestant
):
    round_a = make_round()
    shown = make_contestant(round_a, name="Shown", visible=True)
    make_contestant(round_a, name="Hidden", order=2)

    judge_view = judge_client.get(f"/api/contestants/round/{round_a.id}").get_json()
    admin_view = admin_client.get(f"/api/contestants/round/{round_a.id}").get_json()

    assert [c["id"] for c in judge_view] == [shown.id]
    assert len(admin_view) == 2


def test_hidden_contestant_detail_is_not_found_for_judges(
    judge_client, make_round, make_contestant
):
    hidden = make_contestant(make_round())

    assert judge_client.get(f"/api/contestants/{hidden.id}").status_code == 404


def test_visibility_toggle_feeds_global_visible_list(
    admin_client, judge_client, make_round, make_contestant
):
    old_round = make_round(name="Old", round_number=1)
    make_round(name="Live", round_number=2, is_active=True)
    contestant = make_contestant(old_round)

    response = admin_client.put(
        f"/api/contestants/{contestant.id}/visibility", json={"isVisibleToJudges": True}
    )
    assert response.status_code == 200
    assert response.get_json()["isVisibleToJudges"] is True

    visible = judge_client.get("/api/contestants/visible").get_json()
    assert [c["id"] for c in visible] == [contestant.id]

    per_round = judge_client.get(f"/api/contestants/visible/{old_round.id}").get_json()
    assert [c["id"] for c in per_round] == [contestant.id]


def test_visibility_requires_boolean(admin_client, make_round, make_contestant):
    contestant = make_contestant(make_round())

    response = admin_client.put(
        f"/api/contestants/{contestant.id}/visibility", json={"isVisibleToJudges": "on"}
    )

    assert response.status_code == 400


def test_judge_cannot_toggle_visibility(judge_client, make_round, make_contestant):
    contestant = make_contestant(make_round())

    response = judge_client.put(
        f"/api/contestants/{contestant.id}/visibility", json={"isVisibleToJudges": True}
    )

    assert response.status_code == 403


def test_update_contestant(admin_client, make_round, make_contestant):
    contestant = make_contestant(make_round())

    response = admin_client.put(
        f"/api/contestants/{contestant.id}", json={"description": "Juggling act", "order": 5}
    )

    assert response.status_code == 200
    assert response.get_json()["description"] == "Juggling act"
    assert response.get_json()["order"] == 5


def test_delete_contestant_takes_votes_with_it(
    admin_client, make_round, make_contestant, judges
):
    from talentvote.services import ledger

    round_a = make_round()
    contestant = make_contestant(round_a, visible=True)
    for judge in judges[:2]:
        ledger.cast_vote(judge.id, contestant.id, True)

    response = admin_client.delete(f"/api/contestants/{contestant.id}")

    assert response.status_code == 200
    assert response.get_json()["removedVotes"] == 2
    assert admin_client.get(f"/api/contestants/round/{round_a.id}").get_json() == []
    assert admin_client.get(f"/api/votes/contestant/{contestant.id}").get_json() == []


def test_admin_lists_every_contestant_across_rounds(
    admin_client, judge_client, make_round, make_contestant
):
    later = make_round(name="Final", round_number=2)
    earlier = make_round(name="Heats", round_number=1)
    final_act = make_contestant(later, name="Final act", order=1, visible=True)
    second = make_contestant(earlier, name="Second", order=2)
    first = make_contestant(earlier, name="First", order=1)

    response = admin_client.get("/api/contestants/all")

    assert response.status_code == 200
    assert [c["id"] for c in response.get_json()] == [first.id, second.id, final_act.id]
    assert judge_client.get("/api/contestants/all").status_code == 403


def test_non_text_contestant_fields_are_field_errors(admin_client, make_round):
    round_a = make_round()

    response = admin_client.post(
        "/api/contestants", json=_payload(round_a.id, name=7, category=None, description=3)
    )

    assert response.status_code == 400
    fields = response.get_json()["fields"]
    assert set(fields) == {"name", "category", "description"}


def test_fractional_age_is_rejected(admin_client, make_round):
    round_a = make_round()

    response = admin_client.post("/api/contestants", json=_payload(round_a.id, age=17.9))

    assert response.status_code == 400
    assert "age" in response.get_json()["fields"]


def test_whole_number_floats_are_accepted(admin_client, make_round):
    round_a = make_round()

    response = admin_client.post("/api/contestants", json=_payload(round_a.id, age=12.0))

    assert response.status_code == 201
    assert response.get_json()["age"] == 12


def test_array_body_is_rejected(admin_client, make_round, make_contestant):
    contestant = make_contestant(make_round())

    response = admin_client.put(f"/api/contestants/{contestant.id}/visibility", json=[1])

    assert response.status_code == 400
    assert "body" in response.get_json()["fields"]
