"""End-to-end tests for the HTTP surface."""

from decimal import Decimal


def _create_venue(client, name="Qaddafi Stadium", capacity=45000):
    response = client.post(
        "/api/venues",
        json={"name": name, "location": "Lahore, Pakistan", "capacity": capacity},
    )
    assert response.status_code == 201
    return response.json()


def _create_participant(client, name="Sara Ahmed", age=19, gender="Female"):
    return client.post(
        "/api/participants",
        json={"name": name, "nationality": "Pakistan", "age": age, "gender": gender},
    )


def _create_event(client, venue_id, sport_type="Boxing"):
    response = client.post(
        "/api/events",
        json={
            "sport_type": sport_type,
            "event_date": "2026-03-11",
            "event_time": "15:00:00",
            "venue_id": venue_id,
        },
    )
    assert response.status_code == 201
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["status"] == "ok"


def test_create_event_returns_derived_schedule(client):
    venue = _create_venue(client)

    body = _create_event(client, venue["id"])

    assert body["schedule"]["event_id"] == body["event"]["id"]
    assert body["schedule"]["venue_id"] == venue["id"]
    assert body["schedule"]["scheduled_date"] == "2026-03-11"
    assert body["schedule"]["scheduled_time"] == "15:00:00"


def test_create_event_unknown_venue_conflict(client):
    response = client.post(
        "/api/events",
        json={
            "sport_type": "Boxing",
            "event_date": "2026-03-11",
            "event_time": "15:00:00",
            "venue_id": 999,
        },
    )

    assert response.status_code == 409
    assert client.get("/api/events").json() == []


def test_reschedule_and_history(client):
    original_venue = _create_venue(client, "Qaddafi Stadium")
    new_venue = _create_venue(client, "Melbourne Cricket Ground", 100000)
    created = _create_event(client, original_venue["id"])
    schedule_id = created["schedule"]["id"]

    response = client.put(
        f"/api/schedules/{schedule_id}",
        json={"scheduled_date": "2026-03-15", "scheduled_time": "17:00:00", "venue_id": new_venue["id"]},
    )

    assert response.status_code == 200
    assert response.json()["scheduled_date"] == "2026-03-15"
    assert response.json()["venue_id"] == new_venue["id"]

    event = client.get(f"/api/events/{created['event']['id']}").json()
    assert event["event_date"] == "2026-03-11"
    assert event["venue_id"] == original_venue["id"]

    history = client.get(f"/api/schedules/{schedule_id}/history").json()
    assert len(history) == 1
    assert history[0]["old_date"] == "2026-03-11"
    assert history[0]["new_date"] == "2026-03-15"
    assert history[0]["old_time"] == "15:00:00"
    assert history[0]["new_time"] == "17:00:00"
    assert history[0]["old_venue_id"] == original_venue["id"]
    assert history[0]["new_venue_id"] == new_venue["id"]


def test_reschedule_by_event(client):
    venue = _create_venue(client)
    created = _create_event(client, venue["id"])
    event_id = created["event"]["id"]

    response = client.put(
        f"/api/events/{event_id}/schedule",
        json={"scheduled_date": "2026-03-20", "scheduled_time": "10:00:00", "venue_id": venue["id"]},
    )

    assert response.status_code == 200
    assert client.get(f"/api/events/{event_id}/schedule").json()["scheduled_date"] == "2026-03-20"


def test_reschedule_errors(client):
    venue = _create_venue(client)
    created = _create_event(client, venue["id"])
    payload = {"scheduled_date": "2026-03-15", "scheduled_time": "17:00:00", "venue_id": venue["id"]}

    assert client.put("/api/schedules/999", json=payload).status_code == 404

    payload["venue_id"] = 999
    response = client.put(f"/api/schedules/{created['schedule']['id']}", json=payload)
    assert response.status_code == 409
    assert client.get(f"/api/schedules/{created['schedule']['id']}/history").json() == []

    assert client.get("/api/schedules/999/history").status_code == 404


def test_list_schedule_by_date(client):
    venue = _create_venue(client)
    _create_event(client, venue["id"], "Boxing")

    assert len(client.get("/api/schedules", params={"date": "2026-03-11"}).json()) == 1
    assert client.get("/api/schedules", params={"date": "2026-03-12"}).json() == []
    row = client.get("/api/schedules").json()[0]
    assert row["sport_type"] == "Boxing"
    assert row["venue_name"] == "Qaddafi Stadium"


def test_create_participant_age_zero_rejected(client):
    response = _create_participant(client, name="Test Person", age=0, gender="Male")

    assert response.status_code == 400
    assert "age must be >= 1" in response.json()["detail"]
    assert client.get("/api/participants", params={"nationality": "Pakistan"}).json() == []


def test_create_participant_invalid_gender(client):
    assert _create_participant(client, gender="Unknown").status_code == 400


def test_participants_by_nationality(client):
    _create_participant(client, "Ali Raza", 22, "Male")
    _create_participant(client, "Sara Ahmed", 19, "Female")

    body = client.get("/api/participants", params={"nationality": "Pakistan"}).json()

    assert [p["name"] for p in body] == ["Ali Raza", "Sara Ahmed"]
    assert body[1]["gender"] == "Female"


def test_enrollment_age_gate(client):
    venue = _create_venue(client)
    event_id = _create_event(client, venue["id"])["event"]["id"]
    adult = _create_participant(client, "Sara Ahmed", 19).json()
    minor = _create_participant(client, "Young Runner", 15).json()

    ok = client.post(f"/api/events/{event_id}/participants", json={"participant_id": adult["id"]})
    assert ok.status_code == 201
    assert ok.json() == {
        "event_id": event_id,
        "participant_id": adult["id"],
        "score": None,
        "ranking": None,
    }

    rejected = client.post(f"/api/events/{event_id}/participants", json={"participant_id": minor["id"]})
    assert rejected.status_code == 400
    assert "16" in rejected.json()["detail"]

    duplicate = client.post(f"/api/events/{event_id}/participants", json={"participant_id": adult["id"]})
    assert duplicate.status_code == 409

    results = client.get(f"/api/events/{event_id}/results").json()["results"]
    assert [r["participant_id"] for r in results] == [adult["id"]]


def test_record_and_list_results(client):
    venue = _create_venue(client)
    event_id = _create_event(client, venue["id"], "100m Sprint")["event"]["id"]
    first = _create_participant(client, "Ali Raza", 22, "Male").json()
    second = _create_participant(client, "Kenji Tanaka", 25, "Male").json()
    team = _create_participant(client, "Omar Abdullah", 26, "Male").json()

    client.put(f"/api/events/{event_id}/results/{second['id']}", json={"score": "9.92", "ranking": 2})
    client.put(f"/api/events/{event_id}/results/{team['id']}", json={"score": None, "ranking": None})
    response = client.put(f"/api/events/{event_id}/results/{first['id']}", json={"score": "9.85", "ranking": 1})
    assert response.status_code == 200

    results = client.get(f"/api/events/{event_id}/results").json()["results"]
    assert [r["participant_name"] for r in results] == ["Ali Raza", "Kenji Tanaka", "Omar Abdullah"]
    assert Decimal(results[0]["score"]) == Decimal("9.85")
    assert results[2]["score"] is None
    assert results[2]["ranking"] is None

    standings = client.get("/api/standings", params={"sport_type": "100m Sprint"}).json()
    assert [s["ranking"] for s in standings] == [1, 2, None]

    report = client.get("/api/results").json()
    assert len(report) == 3
    assert report[0]["gender"] == "Male"


def test_record_result_partial_body_keeps_score(client):
    venue = _create_venue(client)
    event_id = _create_event(client, venue["id"], "100m Sprint")["event"]["id"]
    runner = _create_participant(client, "Ali Raza", 22, "Male").json()
    url = f"/api/events/{event_id}/results/{runner['id']}"

    client.put(url, json={"score": "9.85"})
    response = client.put(url, json={"ranking": 1})

    assert response.status_code == 200
    assert Decimal(response.json()["score"]) == Decimal("9.85")
    assert response.json()["ranking"] == 1

    cleared = client.put(url, json={"score": None})
    assert cleared.json()["score"] is None
    assert cleared.json()["ranking"] == 1


def test_results_unknown_event(client):
    assert client.get("/api/events/999/results").status_code == 404
    assert client.put("/api/events/999/results/1", json={}).status_code == 409
