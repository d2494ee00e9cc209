"""Tests for roster and library endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from coach_dashboard.api.app import create_app


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_client_lifecycle(container) -> None:
    client = TestClient(create_app(container))

    created = client.post(
        "/clients",
        json={"name": "Jane Doe", "email": "jane@example.com", "tag": "in-person"},
    )
    client_id = created.json()["id"]
    updated = client.patch(f"/clients/{client_id}", json={"goal": "Run a 10k"})
    listed = client.get("/clients", params={"tag": "in-person"})
    fetched = client.get(f"/clients/{client_id}")

    assert created.status_code == 201
    assert created.json()["duration"] == "active"
    assert updated.json()["goal"] == "Run a 10k"
    assert [c["id"] for c in listed.json()["clients"]] == [client_id]
    assert fetched.json()["name"] == "Jane Doe"


def test_client_errors(container) -> None:
    client = TestClient(create_app(container))

    invalid = client.post("/clients", json={"name": "Jane", "email": "nope"})
    missing = client.get(f"/clients/{uuid4()}")

    assert invalid.status_code == 422
    assert missing.status_code == 404


def test_library_endpoints(container) -> None:
    coach_id = uuid4()
    client = TestClient(create_app(container))

    created = client.post(
        f"/coaches/{coach_id}/foods",
        json={"name": "Chicken", "protein": "31", "fats": "3.6", "notes": "grilled"},
    )
    food_id = created.json()["id"]
    search = client.get(f"/coaches/{coach_id}/foods", params={"q": "GRILL"})
    detail = client.get(f"/coaches/{coach_id}/foods/{food_id}")
    other_coach = client.get(f"/coaches/{uuid4()}/foods/{food_id}")

    assert created.status_code == 201
    assert created.json()["calories"] == 156
    assert created.json()["macro_split"] == {
        "protein_pct": 79,
        "carbs_pct": 0,
        "fats_pct": 21,
    }
    assert [food["id"] for food in search.json()["foods"]] == [food_id]
    assert detail.status_code == 200
    assert other_coach.status_code == 404


def test_library_rejects_unknown_unit(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/coaches/{uuid4()}/foods", json={"name": "Soup", "serving_unit": "bowls"}
    )

    assert response.status_code == 422
