from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from fittrack.core.config import settings

GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk><name>Lunch loop</name><trkseg>
    <trkpt lat="37.000" lon="-122.0"><ele>10.0</ele><time>2026-03-14T12:00:00Z</time></trkpt>
    <trkpt lat="37.001" lon="-122.0"><ele>14.0</ele><time>2026-03-14T12:01:00Z</time></trkpt>
    <trkpt lat="37.002" lon="-122.0"><ele>12.0</ele><time>2026-03-14T12:02:00Z</time></trkpt>
    <trkpt lat="37.003" lon="-122.0"><ele>12.0</ele></trkpt>
  </trkseg></trk>
</gpx>
"""


def make_template(client, name, category=None):
    return client.post("/templates/", json={"name": name, "category": category}).json()["id"]


def strength_workout(client, template_id, sets, day="2026-03-10"):
    workout = client.post("/workouts/strength", json={"date": day, "name": "Push day"}).json()
    exercise = client.post(f"/workouts/{workout['id']}/exercises", json={"template_id": template_id}).json()
    for reps, weight in sets:
        r = client.post(f"/exercises/{exercise['id']}/sets", json={"reps": reps, "weight": weight})
        assert r.status_code == 200, r.text
    return workout, exercise


def test_strength_workout_flow(client):
    bench = make_template(client, "Bench Press", "Chest")
    workout, exercise = strength_workout(client, bench, [(5, 200.0), (8, 150.0), (10, 100.0)])
    assert workout["kind"] == "strength"
    assert workout["finalized"] is False

    sets = client.get(f"/exercises/{exercise['id']}").json()["sets"]
    assert [s["order"] for s in sets] == [0, 1, 2]

    finished = client.post(f"/workouts/{workout['id']}/finish")
    assert finished.status_code == 200, finished.text
    [snapshot] = finished.json()
    assert snapshot["max_weight"] == 200.0
    assert snapshot["max_reps"] == 10
    assert snapshot["total_volume"] == pytest.approx(3200.0)
    assert snapshot["average_weight"] == pytest.approx(150.0)
    assert snapshot["one_rep_max"] == pytest.approx(150 * 36 / 29)

    latest = client.get(f"/progress/{bench}/latest").json()
    assert latest["exercise_id"] == exercise["id"]

    bests = {m["kind"]: m["value"] for m in client.get(f"/progress/{bench}/bests").json()}
    assert bests["max_weight"] == 200.0
    assert bests["max_reps"] == 10
    assert bests["one_rep_max"] == pytest.approx(150 * 36 / 29)
    assert set(bests) == {"one_rep_max", "max_weight", "max_reps"}


def test_finished_workout_is_sealed(client):
    bench = make_template(client, "Bench Press")
    workout, exercise = strength_workout(client, bench, [(5, 100.0)])
    client.post(f"/workouts/{workout['id']}/finish")

    assert client.post(f"/exercises/{exercise['id']}/sets", json={"reps": 5, "weight": 1.0}).status_code == 409
    assert client.put(f"/exercises/{exercise['id']}/sets/0", json={"reps": 6}).status_code == 409
    assert client.delete(f"/exercises/{exercise['id']}/sets/0").status_code == 409
    assert client.post(f"/workouts/{workout['id']}/exercises", json={"template_id": bench}).status_code == 409
    assert client.post(f"/workouts/{workout['id']}/finish").status_code == 409


def test_set_edit_and_removal_reindexes(client):
    squat = make_template(client, "Squat")
    _, exercise = strength_workout(client, squat, [(5, 100.0), (6, 110.0), (7, 120.0)])
    eid = exercise["id"]

    edited = client.put(f"/exercises/{eid}/sets/1", json={"weight": 115.0}).json()
    assert edited == {"order": 1, "reps": 6, "weight": 115.0}

    after = client.delete(f"/exercises/{eid}/sets/0").json()
    assert [(s["order"], s["reps"]) for s in after["sets"]] == [(0, 6), (1, 7)]

    added = client.post(f"/exercises/{eid}/sets", json={"reps": 3, "weight": 130.0}).json()
    assert added["order"] == 2

    assert client.delete(f"/exercises/{eid}/sets/9").status_code == 404
    assert client.put(f"/exercises/{eid}/sets/9", json={"reps": 1}).status_code == 404


def test_set_validation(client):
    squat = make_template(client, "Squat")
    _, exercise = strength_workout(client, squat, [])
    assert client.post(f"/exercises/{exercise['id']}/sets", json={"reps": 0, "weight": 10}).status_code == 422
    assert client.post(f"/exercises/{exercise['id']}/sets", json={"reps": 5, "weight": -1}).status_code == 422


def test_personal_bests_only_ratchet_up(client):
    bench = make_template(client, "Bench Press")
    first, _ = strength_workout(client, bench, [(5, 200.0)], day="2026-03-01")
    client.post(f"/workouts/{first['id']}/finish")
    second, _ = strength_workout(client, bench, [(5, 180.0)], day="2026-03-08")
    client.post(f"/workouts/{second['id']}/finish")

    one_rm = client.get(f"/progress/{bench}/history", params={"kind": "one_rep_max"}).json()
    assert [m["value"] for m in one_rm] == [pytest.approx(225.0)]

    volume = client.get(f"/progress/{bench}/history", params={"kind": "total_volume"}).json()
    assert [m["value"] for m in volume] == [1000.0, 900.0]

    recent = client.get(
        f"/progress/{bench}/history", params={"kind": "total_volume", "since": "2026-03-05"}
    ).json()
    assert [m["date"] for m in recent] == ["2026-03-08"]

    latest = client.get(f"/progress/{bench}/latest").json()
    assert latest["date"] == "2026-03-08"


def test_record_best_endpoint(client):
    bench = make_template(client, "Bench Press")
    results = [
        client.post(
            f"/progress/{bench}/bests",
            json={"kind": "max_weight", "value": v, "date": "2026-01-01"},
        ).json()
        for v in [10, 8, 9, 10]
    ]
    assert [r["recorded"] for r in results] == [True, False, False, False]
    assert results[-1]["best"]["value"] == 10

    history = client.get(f"/progress/{bench}/history", params={"kind": "max_weight"}).json()
    assert len(history) == 1


def test_progress_requires_template(client):
    assert client.get("/progress/42/latest").status_code == 404
    assert client.get("/progress/42/history", params={"kind": "max_weight"}).status_code == 404
    bench = make_template(client, "Bench Press")
    assert client.get(f"/progress/{bench}/latest").status_code == 404


def test_manual_cardio(client):
    run = make_template(client, "Run", "Cardio")
    r = client.post(
        "/workouts/cardio",
        json={
            "date": "2026-03-02",
            "name": "Treadmill",
            "distance_km": 5.0,
            "duration": "00:25:00",
            "template_id": run,
        },
    )
    assert r.status_code == 200, r.text
    workout = r.json()
    assert workout["finalized"] is True
    assert workout["duration"] == "00:25:00"
    cardio = workout["cardio"]
    assert cardio["average_pace"] == pytest.approx(5.0)
    assert cardio["pace"] == "5:00"
    assert cardio["splits"] is None
    assert cardio["best_pace"] is None
    assert cardio["elevation_gain_m"] is None

    bests = {m["kind"] for m in client.get(f"/progress/{run}/bests").json()}
    assert bests == {"longest_distance", "longest_duration"}


def test_manual_cardio_zero_distance_and_bad_duration(client):
    zero = client.post(
        "/workouts/cardio",
        json={"date": "2026-03-02", "name": "Rowing", "distance_km": 0, "duration": "00:10:00"},
    ).json()
    assert zero["cardio"]["average_pace"] == 0.0

    bad = client.post(
        "/workouts/cardio",
        json={"date": "2026-03-02", "name": "Rowing", "distance_km": 1, "duration": "10 minutes"},
    )
    assert bad.status_code == 422


def test_cardio_series_and_recent(client):
    run = make_template(client, "Run", "Cardio")
    for day, km in [("2026-03-01", 5.0), ("2026-03-03", 8.0), ("2026-03-05", 3.0)]:
        client.post(
            "/workouts/cardio",
            json={"date": day, "name": "Run", "distance_km": km, "duration": "00:30:00", "template_id": run},
        )

    total = client.get(f"/progress/cardio/{run}/series", params={"metric": "total_distance"}).json()
    assert [p["value"] for p in total] == [5.0, 13.0, 16.0]

    minutes = client.get(
        f"/progress/cardio/{run}/series", params={"metric": "duration", "since": "2026-03-02"}
    ).json()
    assert [p["value"] for p in minutes] == [30.0, 30.0]

    # manual entries have no best pace
    assert client.get(f"/progress/cardio/{run}/series", params={"metric": "best_pace"}).json() == []

    recent = client.get("/progress/cardio/recent", params={"limit": 2}).json()
    assert [r["date"] for r in recent] == ["2026-03-05", "2026-03-03"]


def test_gpx_import(client):
    run = make_template(client, "Run", "Cardio")
    r = client.post(
        "/workouts/cardio/import",
        params={"template_id": run},
        files={"file": ("lunch.gpx", GPX, "application/gpx+xml")},
    )
    assert r.status_code == 200, r.text
    workout = r.json()
    assert workout["name"] == "lunch"
    assert workout["date"] == "2026-03-14"
    assert workout["duration"] == "00:02:00"
    assert workout["cardio"]["distance_km"] == pytest.approx(0.2224, abs=1e-3)
    assert workout["cardio"]["elevation_gain_m"] == pytest.approx(4.0)
    assert workout["cardio"]["elevation_loss_m"] == pytest.approx(2.0)

    points = client.get(f"/workouts/{workout['id']}/route").json()
    assert [p["sequence"] for p in points] == [1, 2, 3]


def test_gpx_import_rejects_other_files(client):
    r = client.post("/workouts/cardio/import", files={"file": ("run.fit", b"\x0e\x10", "application/octet-stream")})
    assert r.status_code == 400

    broken = client.post("/workouts/cardio/import", files={"file": ("run.gpx", "<gpx", "application/gpx+xml")})
    assert broken.status_code == 400


def test_list_filter_and_delete(client):
    bench = make_template(client, "Bench Press")
    strength, _ = strength_workout(client, bench, [(5, 100.0)], day="2026-03-01")
    client.post(f"/workouts/{strength['id']}/finish")
    imported = client.post(
        "/workouts/cardio/import", files={"file": ("loop.gpx", GPX, "application/gpx+xml")}
    ).json()

    assert [w["kind"] for w in client.get("/workouts/").json()] == ["cardio", "strength"]
    assert [w["id"] for w in client.get("/workouts/", params={"kind": "strength"}).json()] == [strength["id"]]
    assert client.get("/workouts/", params={"end_date": "2026-03-05"}).json()[0]["id"] == strength["id"]

    assert client.delete(f"/workouts/{imported['id']}").status_code == 200
    assert client.get(f"/workouts/{imported['id']}").status_code == 404

    assert client.delete(f"/workouts/{strength['id']}").status_code == 200
    # metric history survives the workout
    assert len(client.get(f"/progress/{bench}/history", params={"kind": "max_weight"}).json()) == 1
    assert client.get(f"/progress/{bench}/latest").status_code == 404


def test_bests_only_report_ratcheted_kinds(client):
    run = make_template(client, "Run", "Cardio")
    for km, duration in [(5.0, "00:25:00"), (0, "00:10:00")]:
        client.post(
            "/workouts/cardio",
            json={"date": "2026-03-02", "name": "Run", "distance_km": km, "duration": duration, "template_id": run},
        )

    bests = {m["kind"]: m["value"] for m in client.get(f"/progress/{run}/bests").json()}
    assert bests == {"longest_distance": 5.0, "longest_duration": 1500.0}

    # the zero-distance pace is still history
    paces = client.get(f"/progress/{run}/history", params={"kind": "average_pace"}).json()
    assert [m["value"] for m in paces] == [5.0, 0.0]


def test_gpx_import_uses_local_calendar_day(client, monkeypatch):
    try:
        ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("no tz database")
    monkeypatch.setattr(settings, "timezone", "America/New_York")

    early = GPX.replace("2026-03-14T12:", "2026-03-14T02:")
    workout = client.post(
        "/workouts/cardio/import", files={"file": ("early.gpx", early, "application/gpx+xml")}
    ).json()
    assert workout["date"] == "2026-03-13"
