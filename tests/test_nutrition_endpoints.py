"""Tests for nutrition endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from coach_dashboard.api.app import create_app
from tests.conftest import InMemoryFoodEntryRepository


def test_weekly_report_endpoint(
    container, entry_repository: InMemoryFoodEntryRepository
) -> None:
    client_id = uuid4()
    entry_repository.add(client_id, "20250203", calories="800", protein="60")
    entry_repository.add(client_id, "20250206", calories=700, protein="bad")
    client = TestClient(create_app(container))

    response = client.get(
        f"/clients/{client_id}/nutrition/week",
        params={"date": "2025-02-05", "hide": ["protein", "fats"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["week_start"] == "2025-02-03"
    assert data["previous_week"] == "2025-01-27"
    assert data["next_week"] == "2025-02-10"
    assert [day["day_key"] for day in data["days"]][0] == "20250203"
    assert data["days"][0]["has_data"] is True
    assert data["days"][1]["has_data"] is False
    assert data["chart"]["labels"][0] == "Mon"
    assert [ds["macro"] for ds in data["chart"]["datasets"]] == ["calories", "carbs"]
    assert data["chart"]["datasets"][0]["data"] == [800, 0, 0, 700, 0, 0, 0]
    assert data["stats"]["total"]["calories"] == 1500
    assert data["stats"]["total"]["protein"] == 60
    assert round(data["stats"]["average"]["calories"], 1) == 214.3
    assert data["stats"]["policy"] == "zero_fill"
    assert data["failed_days"] == []


def test_weekly_report_reports_failed_days(
    container, entry_repository: InMemoryFoodEntryRepository
) -> None:
    entry_repository.failing_days.add("20250204")
    client = TestClient(create_app(container))

    response = client.get(
        f"/clients/{uuid4()}/nutrition/week", params={"date": "2025-02-05"}
    )

    assert response.status_code == 200
    assert response.json()["failed_days"] == ["20250204"]


def test_weekly_report_rejects_unknown_macro(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        f"/clients/{uuid4()}/nutrition/week", params={"hide": "sugar"}
    )

    assert response.status_code == 422


def test_log_entry_then_read_day(container) -> None:
    client_id = uuid4()
    client = TestClient(create_app(container))

    created = client.post(
        f"/clients/{client_id}/nutrition/entries",
        json={"name": "Banana", "calories": "105", "carbs": 27, "day": "2025-02-03"},
    )
    day = client.get(f"/clients/{client_id}/nutrition/days/20250203")

    assert created.status_code == 201
    assert created.json()["day_key"] == "20250203"
    assert day.status_code == 200
    body = day.json()
    assert body["date"] == "2025-02-03"
    assert body["summary"]["calories"] == 105
    assert body["summary"]["carbs"] == 27
    assert body["entries"][0]["name"] == "Banana"
    entry_id = created.json()["id"]
    assert body["entries"][0]["path"] == (
        f"users/{client_id}/foods/20250203/entries/{entry_id}"
    )


def test_log_entry_validation_error(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(f"/clients/{uuid4()}/nutrition/entries", json={"name": " "})

    assert response.status_code == 422
    assert response.json() == {"detail": "Food name is required"}


def test_invalid_day_key(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/clients/{uuid4()}/nutrition/days/2025-02-03")

    assert response.status_code == 422


def test_log_from_library(container) -> None:
    client_id = uuid4()
    coach_id = uuid4()
    client = TestClient(create_app(container))
    food = client.post(
        f"/coaches/{coach_id}/foods",
        json={"name": "Oats", "protein": 5, "carbs": 27, "fats": 3},
    ).json()

    response = client.post(
        f"/clients/{client_id}/nutrition/entries/from-library",
        json={"food_id": food["id"], "servings": 2, "day": "2025-02-03"},
    )
    missing = client.post(
        f"/clients/{client_id}/nutrition/entries/from-library",
        json={"food_id": str(uuid4())},
    )

    assert response.status_code == 201
    assert response.json()["calories"] == food["calories"] * 2
    assert missing.status_code == 404


def test_weekly_report_at_calendar_edges(container) -> None:
    client = TestClient(create_app(container))

    first = client.get(
        f"/clients/{uuid4()}/nutrition/week", params={"date": "0001-01-03"}
    )
    last = client.get(
        f"/clients/{uuid4()}/nutrition/week", params={"date": "9999-12-31"}
    )

    assert first.status_code == 200
    assert first.json()["week_start"] == "0001-01-01"
    assert first.json()["previous_week"] is None
    assert first.json()["next_week"] == "0001-01-08"
    assert last.status_code == 422
