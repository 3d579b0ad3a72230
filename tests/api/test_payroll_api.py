from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from payroll_api.core.config import Settings
from payroll_api.main import app
from payroll_api.services.payroll import PayrollService, get_service
from payroll_api.store.repository import InMemoryRepository

EMPLOYEE_PAYLOAD = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "phone": "555-123-4567",
    "department": "Engineering",
    "position": "Engineer",
    "hire_date": "2020-01-06",
    "salary": 52000,
    "payment_frequency": "BI_WEEKLY",
    "bank_account": {"routing_number": "021000021", "account_number": "123456789", "account_type": "CHECKING"},
}


@pytest.fixture(autouse=True)
def fresh_service():
    service = PayrollService(InMemoryRepository(), InMemoryRepository(), Settings())
    app.dependency_overrides[get_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def create_employee(client: TestClient, **overrides) -> dict:
    response = client.post("/payroll/employees", json={**EMPLOYEE_PAYLOAD, **overrides})
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_employees_empty(client):
    response = client.get("/payroll/employees")

    assert response.status_code == 200
    assert response.json() == {"data": [], "total": 0, "page": 0, "limit": 25}


def test_create_employee_and_fetch(client):
    created = create_employee(client)

    assert created["id"].startswith("emp-")
    assert created["employee_number"].startswith("EMP")
    assert created["status"] == "ACTIVE"
    assert created["bank_account"]["routing_number"] == "021000021"

    response = client.get(f"/payroll/employees/{created['id']}")
    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"


def test_create_employee_returns_validation_errors(client):
    payload = {**EMPLOYEE_PAYLOAD, "email": "bad", "phone": "123", "salary": 0}
    payload["bank_account"] = {"routing_number": "123", "account_number": "1"}

    response = client.post("/payroll/employees", json=payload)

    assert response.status_code == 422
    errors = response.json()["detail"]["errors"]
    assert set(errors) == {"email", "phone", "salary", "routing_number", "account_number"}


def test_list_employees_filters_and_paginates(client):
    create_employee(client)
    create_employee(client, first_name="Grace", department="Operations", status="ON_LEAVE")
    create_employee(client, first_name="Alan", department="Research")

    by_status = client.get("/payroll/employees", params={"status": "ON_LEAVE"}).json()
    searched = client.get("/payroll/employees", params={"search": "alan"}).json()
    paged = client.get("/payroll/employees", params={"page": 1, "limit": 2}).json()

    assert [e["first_name"] for e in by_status["data"]] == ["Grace"]
    assert [e["first_name"] for e in searched["data"]] == ["Alan"]
    assert paged["total"] == 3
    assert len(paged["data"]) == 1


def test_update_with_null_required_fields_keeps_stored_values(client, fresh_service):
    created = create_employee(client, phone="555-123-4567")

    response = client.put(
        f"/payroll/employees/{created['id']}",
        json={"payment_frequency": None, "status": None, "employment_type": None, "hire_date": None, "phone": None},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["payment_frequency"] == "BI_WEEKLY"
    assert body["status"] == "ACTIVE"
    assert body["employment_type"] == created["employment_type"]
    assert body["hire_date"] == "2020-01-06"
    assert body["phone"] is None
    stored = fresh_service.get_employee(created["id"])
    assert stored.payment_frequency == "BI_WEEKLY"
    assert stored.status == "ACTIVE"


def test_update_and_delete_employee(client):
    created = create_employee(client)

    update = client.put(f"/payroll/employees/{created['id']}", json={"position": "Lead"})
    invalid = client.put(f"/payroll/employees/{created['id']}", json={"email": "broken"})
    delete = client.delete(f"/payroll/employees/{created['id']}")
    missing = client.delete(f"/payroll/employees/{created['id']}")

    assert update.status_code == 200
    assert update.json()["position"] == "Lead"
    assert invalid.status_code == 422
    assert delete.status_code == 204
    assert missing.status_code == 404


def test_payroll_run_lifecycle(client):
    employee = create_employee(client)
    request = {
        "pay_period_start": "2024-01-01",
        "pay_period_end": "2024-01-14",
        "payment_date": "2024-01-19",
        "employee_ids": [employee["id"]],
    }

    preview = client.post("/payroll/runs/preview", json=request)
    assert preview.status_code == 200
    assert preview.json()["totals"]["total_net_amount"] == pytest.approx(1400)

    created = client.post("/payroll/runs", json=request)
    assert created.status_code == 201
    run = created.json()
    assert run["status"] == "PROCESSING"
    assert run["total_gross_amount"] == pytest.approx(2000)
    assert run["total_deductions"] == pytest.approx(600)
    assert run["total_amount"] == pytest.approx(1400)
    payment = run["payments"][0]
    assert payment["metadata"]["period"] == "Jan 1, 2024 - Jan 14, 2024"
    assert payment["metadata"]["deduction_details"]["tax"] == pytest.approx(500)

    processed = client.post(f"/payroll/runs/{run['id']}/process")
    assert processed.status_code == 200
    assert processed.json()["status"] == "COMPLETED"
    assert processed.json()["metadata"]["successful_payments"] == 1

    again = client.post(f"/payroll/runs/{run['id']}/process")
    assert again.status_code == 409

    payments = client.get(f"/payroll/runs/{run['id']}/payments").json()
    assert [p["status"] for p in payments] == ["COMPLETED"]
    single = client.get(f"/payroll/runs/{run['id']}/payments/{payment['id']}")
    assert single.status_code == 200
    assert client.get(f"/payroll/runs/{run['id']}/payments/nope").status_code == 404


def test_create_run_without_employees_is_rejected(client):
    response = client.post(
        "/payroll/runs",
        json={"pay_period_start": "2024-01-01", "pay_period_end": "2024-01-14", "payment_date": "2024-01-19"},
    )

    assert response.status_code == 422
    assert "employee_ids" in response.json()["detail"]["errors"]


def test_cancel_and_list_runs(client):
    employee = create_employee(client)
    base = {"pay_period_start": "2024-01-01", "pay_period_end": "2024-01-14", "employee_ids": [employee["id"]]}
    older = client.post("/payroll/runs", json={**base, "payment_date": "2024-01-19"}).json()
    newer = client.post("/payroll/runs", json={**base, "payment_date": "2024-02-02"}).json()

    cancelled = client.post(f"/payroll/runs/{older['id']}/cancel")
    listed = client.get("/payroll/runs").json()
    failed = client.get("/payroll/runs", params={"status": "FAILED"}).json()

    assert cancelled.status_code == 200
    assert cancelled.json()["payments"][0]["status"] == "CANCELLED"
    assert [r["id"] for r in listed] == [newer["id"], older["id"]]
    assert [r["id"] for r in failed] == [older["id"]]
    assert client.get("/payroll/runs/pr-missing").status_code == 404


def test_summary_and_analytics(client):
    employee = create_employee(client)
    create_employee(client, first_name="Grace", status="TERMINATED")

    summary = client.get("/payroll/summary").json()
    analytics = client.get("/payroll/analytics").json()

    assert summary["total_employees"] == 2
    assert summary["active_employees"] == 1
    assert summary["upcoming_payroll_amount"] == pytest.approx(1400)
    assert summary["last_payroll_date"] is None
    assert analytics["total_employees"] == 2
    assert analytics["total_payroll_runs"] == 0
    assert employee["id"]
