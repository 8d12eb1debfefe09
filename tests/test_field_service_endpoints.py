"""Tests for publisher field service endpoints."""

from uuid import uuid4

from fastapi.testclient import TestClient

from field_service_tracker.api.app import create_app
from tests.conftest import InMemoryFieldServiceRepository, InMemoryPublisherRepository

HEADERS = {"X-Api-Token": "api-token"}


def test_daily_report_endpoints_maintain_monthly_report(
    container,
    publisher_repository: InMemoryPublisherRepository,
    field_service_repository: InMemoryFieldServiceRepository,
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add("Anna")
    base = f"/publishers/{publisher.id}"

    for day, hours, studies in (("01", 2, ["A"]), ("02", 3, ["A", "B"])):
        response = client.post(
            f"{base}/daily-reports",
            json={"date": f"2024-03-{day}", "hours": hours, "bible_study_ids": studies},
            headers=HEADERS,
        )
        assert response.status_code == 200
        assert response.json()["data"]["month"] == "2024-03"

    response = client.get(
        f"{base}/monthly-summary", params={"month": "2024-03"}, headers=HEADERS
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["daily_reports"]) == 2
    assert data["monthly_report"]["hours"] == 5
    assert data["monthly_report"]["bible_students"] == 2
    assert data["totals"] == {
        "hours": 5,
        "placements": 0,
        "videos": 0,
        "bible_studies": 3,
    }

    report_ids = [report["id"] for report in data["daily_reports"]]
    for report_id in report_ids:
        response = client.delete(f"{base}/daily-reports/{report_id}", headers=HEADERS)
        assert response.status_code == 200

    assert field_service_repository.get_monthly_report(publisher.id, "2024-03") is None
    response = client.get(
        f"{base}/daily-reports", params={"month": "2024-03"}, headers=HEADERS
    )
    assert response.json()["data"] == []


def test_daily_report_requires_token(
    container, publisher_repository: InMemoryPublisherRepository
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()

    response = client.post(
        f"/publishers/{publisher.id}/daily-reports", json={"date": "2024-03-01"}
    )

    assert response.status_code == 401


def test_unknown_publisher_returns_404(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/publishers/{uuid4()}/daily-reports",
        json={"date": "2024-03-01", "hours": 1},
        headers=HEADERS,
    )

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_delete_missing_report_returns_404(
    container, publisher_repository: InMemoryPublisherRepository
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()

    response = client.delete(
        f"/publishers/{publisher.id}/daily-reports/{uuid4()}", headers=HEADERS
    )

    assert response.status_code == 404


def test_negative_hours_return_422(
    container, publisher_repository: InMemoryPublisherRepository
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()

    response = client.post(
        f"/publishers/{publisher.id}/daily-reports",
        json={"date": "2024-03-01", "hours": -1},
        headers=HEADERS,
    )

    assert response.status_code == 422
    assert "hours" in response.json()["error"]


def test_invalid_month_returns_422(
    container, publisher_repository: InMemoryPublisherRepository
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()

    response = client.get(
        f"/publishers/{publisher.id}/daily-reports",
        params={"month": "2024-3"},
        headers=HEADERS,
    )

    assert response.status_code == 422


def test_aggregation_failure_returns_saved_report(
    container,
    publisher_repository: InMemoryPublisherRepository,
    field_service_repository: InMemoryFieldServiceRepository,
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()
    field_service_repository.fail_monthly_writes = True

    response = client.post(
        f"/publishers/{publisher.id}/daily-reports",
        json={"date": "2024-03-01", "hours": 2},
        headers=HEADERS,
    )

    assert response.status_code == 500
    body = response.json()
    assert body["operation"] == "saved"
    assert body["data"]["hours"] == 2
    assert len(field_service_repository.daily) == 1

    field_service_repository.fail_monthly_writes = False
    response = client.post(
        f"/publishers/{publisher.id}/monthly-reports/2024-03/recalculate",
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["data"]["hours"] == 2


def test_recalculate_empty_month_returns_null(
    container, publisher_repository: InMemoryPublisherRepository
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()

    response = client.post(
        f"/publishers/{publisher.id}/monthly-reports/2024-03/recalculate",
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json()["data"] is None


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.json() == {"status": "ok"}


def test_aggregation_failure_after_delete_reports_deleted_id(
    container,
    publisher_repository: InMemoryPublisherRepository,
    field_service_repository: InMemoryFieldServiceRepository,
) -> None:
    client = TestClient(create_app(container))
    publisher = publisher_repository.add()
    created = client.post(
        f"/publishers/{publisher.id}/daily-reports",
        json={"date": "2024-03-01", "hours": 2},
        headers=HEADERS,
    )
    report_id = created.json()["data"]["id"]
    field_service_repository.fail_monthly_writes = True

    response = client.delete(
        f"/publishers/{publisher.id}/daily-reports/{report_id}", headers=HEADERS
    )

    assert response.status_code == 500
    body = response.json()
    assert body["operation"] == "deleted"
    assert body["deleted_report_id"] == report_id
    assert "data" not in body
    assert field_service_repository.daily == {}
