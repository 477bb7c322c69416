from datetime import date, timedelta

import pytest


async def _create(app_client, headers, plate, **extra):
    response = await app_client.post("/api/v1/vehicles", json={"plate": plate, **extra}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_vehicle_lifecycle(app_client, seeded):
    operator = seeded["operator"]

    created = await _create(app_client, operator, "abc 1234", brand="Volvo", model="FH", current_km=1000)
    assert created["plate"] == "ABC1234"
    assert created["branch_id"] == str(seeded["north"])
    assert created["status"] == "active"
    vehicle_id = created["id"]

    patched = await app_client.patch(f"/api/v1/vehicles/{vehicle_id}", json={"color": "white"}, headers=operator)
    assert patched.status_code == 200
    assert patched.json()["data"]["color"] == "white"

    km = await app_client.patch(f"/api/v1/vehicles/{vehicle_id}/km", json={"current_km": 1200}, headers=operator)
    assert km.status_code == 200
    assert km.json()["data"]["current_km"] == 1200

    decreased = await app_client.patch(f"/api/v1/vehicles/{vehicle_id}/km", json={"current_km": 10}, headers=operator)
    assert decreased.status_code == 422
    assert decreased.json()["error"]["details"] == {"current_km": 1200, "requested_km": 10}

    # The operator role lacks vehicles.update-status and vehicles.delete.
    status = await app_client.patch(f"/api/v1/vehicles/{vehicle_id}/status", json={"status": "maintenance"}, headers=operator)
    assert status.status_code == 403
    assert status.json()["error"]["details"]["required_permission"] == "vehicles.update-status"

    admin = seeded["admin"]
    status = await app_client.patch(f"/api/v1/vehicles/{vehicle_id}/status", json={"status": "maintenance"}, headers=admin)
    assert status.status_code == 200
    assert status.json()["data"]["status"] == "maintenance"

    deleted = await app_client.delete(f"/api/v1/vehicles/{vehicle_id}", headers=admin)
    assert deleted.status_code == 200
    assert deleted.json()["data"]["ok"] is True

    missing = await app_client.get(f"/api/v1/vehicles/{vehicle_id}", headers=admin)
    assert missing.status_code == 404

    listed = await app_client.get("/api/v1/vehicles", headers=admin)
    assert all(item["id"] != vehicle_id for item in listed.json()["data"])


@pytest.mark.integration
@pytest.mark.asyncio
async def test_duplicate_plate_conflicts(app_client, seeded):
    await _create(app_client, seeded["operator"], "DUP0001")
    response = await app_client.post("/api/v1/vehicles", json={"plate": "dup0001"}, headers=seeded["operator"])
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "conflict"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_pagination_meta(app_client, seeded):
    for index in range(7):
        await _create(app_client, seeded["operator"], f"PAG{index:04d}")

    first = await app_client.get("/api/v1/vehicles", params={"page": 1, "limit": 3}, headers=seeded["operator"])
    assert first.status_code == 200
    body = first.json()
    assert len(body["data"]) == 3
    assert body["meta"]["pagination"] == {
        "total": 7,
        "page": 1,
        "limit": 3,
        "total_pages": 3,
        "has_next": True,
        "has_prev": False,
    }

    last = await app_client.get("/api/v1/vehicles", params={"page": 3, "limit": 3}, headers=seeded["operator"])
    assert len(last.json()["data"]) == 1
    assert last.json()["meta"]["pagination"]["has_next"] is False

    beyond = await app_client.get("/api/v1/vehicles", params={"page": 9, "limit": 3}, headers=seeded["operator"])
    assert beyond.json()["data"] == []
    assert beyond.json()["meta"]["pagination"]["has_prev"] is True

    clamped = await app_client.get("/api/v1/vehicles", params={"page": 0, "limit": 500}, headers=seeded["operator"])
    meta = clamped.json()["meta"]["pagination"]
    assert (meta["page"], meta["limit"], meta["total_pages"]) == (1, 100, 1)

    defaulted = await app_client.get("/api/v1/vehicles", params={"limit": 0}, headers=seeded["operator"])
    assert defaulted.json()["meta"]["pagination"]["limit"] == 10


@pytest.mark.integration
@pytest.mark.asyncio
async def test_list_date_filter_is_day_aligned(app_client, seeded):
    await _create(app_client, seeded["operator"], "DAY0001")
    today = date.today()
    yesterday = today - timedelta(days=1)

    same_day = await app_client.get(
        "/api/v1/vehicles",
        params={"start_date": today.isoformat(), "end_date": today.isoformat()},
        headers=seeded["operator"],
    )
    assert [item["plate"] for item in same_day.json()["data"]] == ["DAY0001"]

    before = await app_client.get("/api/v1/vehicles", params={"end_date": yesterday.isoformat()}, headers=seeded["operator"])
    assert before.json()["data"] == []
    assert before.json()["meta"]["pagination"]["total_pages"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_branch_scoping(app_client, seeded):
    await _create(app_client, seeded["operator"], "NOR0001")
    await _create(app_client, seeded["admin"], "SOU0001", branch_id=str(seeded["south"]))

    own = await app_client.get("/api/v1/vehicles", headers=seeded["operator"])
    assert [item["plate"] for item in own.json()["data"]] == ["NOR0001"]

    other = await app_client.get("/api/v1/vehicles", params={"branch_id": str(seeded["south"])}, headers=seeded["operator"])
    assert other.status_code == 403

    everything = await app_client.get("/api/v1/vehicles", headers=seeded["admin"])
    assert {item["plate"] for item in everything.json()["data"]} == {"NOR0001", "SOU0001"}

    south_only = await app_client.get("/api/v1/vehicles", params={"branch_id": str(seeded["south"])}, headers=seeded["admin"])
    assert [item["plate"] for item in south_only.json()["data"]] == ["SOU0001"]

    south_id = south_only.json()["data"][0]["id"]
    forbidden = await app_client.get(f"/api/v1/vehicles/{south_id}", headers=seeded["operator"])
    assert forbidden.status_code == 403


@pytest.mark.integration
@pytest.mark.asyncio
async def test_viewer_without_vehicle_permissions(app_client, seeded):
    response = await app_client.get("/api/v1/vehicles", headers=seeded["viewer"])
    assert response.status_code == 403
    assert response.json()["error"]["details"] == {"required_permission": "vehicles.view"}

    me = await app_client.get("/api/v1/me/permissions", headers=seeded["viewer"])
    assert me.status_code == 200
    assert me.json()["data"]["modules"] == ["products"]

    unauthenticated = await app_client.get("/api/v1/vehicles")
    assert unauthenticated.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_deleted_vehicle_releases_its_plate(app_client, seeded):
    admin = seeded["admin"]
    first = await _create(app_client, admin, "REU0001", branch_id=str(seeded["north"]))

    deleted = await app_client.delete(f"/api/v1/vehicles/{first['id']}", headers=admin)
    assert deleted.status_code == 200

    second = await _create(app_client, admin, "reu0001", branch_id=str(seeded["north"]))
    assert second["plate"] == "REU0001"
    assert second["id"] != first["id"]

    duplicate = await app_client.post(
        "/api/v1/vehicles",
        json={"plate": "REU0001", "branch_id": str(seeded["north"])},
        headers=admin,
    )
    assert duplicate.status_code == 409
