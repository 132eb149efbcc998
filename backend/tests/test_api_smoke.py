def test_root_ok(client):
    r = client.get("/")
    assert r.status_code == 200
    data = r.json()
    assert "message" in data


def test_create_and_list_templates(client):
    cr = client.post("/templates/", json={"name": "Bench Press", "category": "Chest"})
    assert cr.status_code == 200, cr.text
    assert cr.json()["name"] == "Bench Press"

    dup = client.post("/templates/", json={"name": "Bench Press"})
    assert dup.status_code == 409

    client.post("/templates/", json={"name": "Squat", "category": "Legs"})
    lr = client.get("/templates/")
    assert lr.status_code == 200
    assert {t["name"] for t in lr.json()} == {"Bench Press", "Squat"}

    by_name = client.get("/templates/", params={"name": "Squat"}).json()
    assert [t["category"] for t in by_name] == ["Legs"]

    assert client.get("/templates/999").status_code == 404
