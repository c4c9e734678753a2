import pytest

from stockpile_api.models.users import User


def _create(client, headers, payload):
    resp = client.post("/stockpiles", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_then_fetch_round_trip(client, auth_headers, stockpile_payload, users):
    headers = auth_headers("supervisor")
    created = _create(client, headers, stockpile_payload)

    assert created["responsible_team_id"] == users["supervisor"]["id"]
    assert created["responsible_name"] == "Supervisor User"

    fetched = client.get(f"/stockpiles/{created['id']}", headers=auth_headers("worker")).json()
    for key in ("name", "material", "grade", "length", "width", "height", "volume", "location"):
        assert fetched[key] == stockpile_payload[key]


def test_create_keeps_submitted_volume(client, auth_headers, stockpile_payload):
    # 10.5 * 4 * 2.25 is 94.5; the server must not recompute it
    created = _create(client, auth_headers("admin"), stockpile_payload)
    assert created["volume"] == 80.0


def test_create_as_worker_is_forbidden(client, auth_headers, stockpile_payload):
    headers = auth_headers("worker")
    before = len(client.get("/stockpiles", headers=headers).json())

    resp = client.post("/stockpiles", json=stockpile_payload, headers=headers)
    assert resp.status_code == 403
    assert resp.json() == {"error": "Access denied"}
    assert len(client.get("/stockpiles", headers=headers).json()) == before


def test_create_without_token_is_unauthorized(client, stockpile_payload):
    resp = client.post("/stockpiles", json=stockpile_payload)
    assert resp.status_code == 401


def test_forbidden_takes_precedence_over_invalid_body(client, auth_headers):
    resp = client.post("/stockpiles", json={"name": ""}, headers=auth_headers("worker"))
    assert resp.status_code == 403


@pytest.mark.parametrize(
    "change",
    [
        {"length": -1},
        {"volume": -0.5},
        {"name": "   "},
        {"material": None},
        {"location": {"type": "Point", "coordinates": [18.0]}},
        {"location": {"type": "Point", "coordinates": [200.0, 10.0]}},
    ],
)
def test_create_with_invalid_input_is_bad_request(client, auth_headers, stockpile_payload, change):
    resp = client.post("/stockpiles", json={**stockpile_payload, **change}, headers=auth_headers("admin"))
    assert resp.status_code == 400
    assert resp.json() == {"error": "Failed to create stockpile"}


def test_list_is_newest_first_with_responsible_name(client, auth_headers, stockpile_payload):
    headers = auth_headers("admin")
    first = _create(client, headers, {**stockpile_payload, "name": "First"})
    second = _create(client, headers, {**stockpile_payload, "name": "Second"})

    resp = client.get("/stockpiles", headers=auth_headers("worker"))
    assert resp.status_code == 200
    items = resp.json()
    assert [s["id"] for s in items] == [second["id"], first["id"]]
    assert all(s["responsible_name"] == "Admin User" for s in items)


def test_list_requires_authentication(client):
    resp = client.get("/stockpiles")
    assert resp.status_code == 401


def test_orphaned_responsible_team_shows_null_name(client, auth_headers, stockpile_payload, users, database):
    created = _create(client, auth_headers("supervisor"), stockpile_payload)
    with database.session() as db:
        db.delete(db.get(User, users["supervisor"]["id"]))
        db.commit()

    fetched = client.get(f"/stockpiles/{created['id']}", headers=auth_headers("admin")).json()
    assert fetched["responsible_name"] is None


def test_get_missing_stockpile_is_not_found(client, auth_headers):
    resp = client.get("/stockpiles/999", headers=auth_headers("worker"))
    assert resp.status_code == 404
    assert resp.json() == {"error": "Stockpile not found"}


def test_update_replaces_fields_and_reassigns_owner(client, auth_headers, stockpile_payload, users):
    created = _create(client, auth_headers("admin"), stockpile_payload)
    changed = {**stockpile_payload, "name": "Renamed", "grade": "B", "volume": 12.0}

    resp = client.put(f"/stockpiles/{created['id']}", json=changed, headers=auth_headers("supervisor"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Renamed"
    assert body["grade"] == "B"
    assert body["volume"] == 12.0
    assert body["responsible_team_id"] == users["supervisor"]["id"]
    assert body["responsible_name"] == "Supervisor User"


def test_update_missing_stockpile_is_not_found(client, auth_headers, stockpile_payload):
    resp = client.put("/stockpiles/999", json=stockpile_payload, headers=auth_headers("admin"))
    assert resp.status_code == 404
    assert resp.json() == {"error": "Stockpile not found"}


def test_update_with_invalid_input_is_bad_request(client, auth_headers, stockpile_payload):
    created = _create(client, auth_headers("admin"), stockpile_payload)
    resp = client.put(
        f"/stockpiles/{created['id']}",
        json={**stockpile_payload, "height": -3},
        headers=auth_headers("admin"),
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Failed to update stockpile"}


def test_update_as_worker_is_forbidden(client, auth_headers, stockpile_payload):
    created = _create(client, auth_headers("admin"), stockpile_payload)
    resp = client.put(f"/stockpiles/{created['id']}", json=stockpile_payload, headers=auth_headers("worker"))
    assert resp.status_code == 403


def test_delete_as_admin(client, auth_headers, stockpile_payload):
    headers = auth_headers("admin")
    created = _create(client, headers, stockpile_payload)

    resp = client.delete(f"/stockpiles/{created['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Stockpile deleted successfully"}
    assert client.get(f"/stockpiles/{created['id']}", headers=headers).status_code == 404


@pytest.mark.parametrize("role", ["supervisor", "worker"])
def test_delete_by_non_admin_is_forbidden_and_record_remains(client, auth_headers, stockpile_payload, role):
    created = _create(client, auth_headers("admin"), stockpile_payload)

    resp = client.delete(f"/stockpiles/{created['id']}", headers=auth_headers(role))
    assert resp.status_code == 403
    assert client.get(f"/stockpiles/{created['id']}", headers=auth_headers(role)).status_code == 200


def test_delete_missing_stockpile_is_not_found(client, auth_headers):
    resp = client.delete("/stockpiles/999", headers=auth_headers("admin"))
    assert resp.status_code == 404
    assert resp.json() == {"error": "Stockpile not found"}


def test_non_numeric_id_is_bad_request(client, auth_headers):
    resp = client.get("/stockpiles/abc", headers=auth_headers("admin"))
    assert resp.status_code == 400
