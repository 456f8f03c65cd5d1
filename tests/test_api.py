"""
HTTP‑level tests for the v1 API.
"""

import pytest
from fastapi.testclient import TestClient

from business_dashboard_api.app.core.record_store import InMemoryRecordStore, set_record_store
from business_dashboard_api.app.main import app


@pytest.fixture
def client():
    return TestClient(app)


def _create_project(client):
    customer = client.post("/api/v1/clients/", json={"name": "Acme", "email": "a@acme.test"}).json()
    return client.post(
        "/api/v1/projects/",
        json={"name": "Website", "status": "active", "client_id": customer["id"]},
    ).json()


class TestClientsApi:
    def test_crud(self, client):
        created = client.post("/api/v1/clients/", json={"name": "Acme", "company": "Acme Ltd"})
        assert created.status_code == 201
        body = created.json()
        assert body["name"] == "Acme"
        assert body["status"] == "active"

        listed = client.get("/api/v1/clients/")
        assert [c["id"] for c in listed.json()] == [body["id"]]

        updated = client.put(f"/api/v1/clients/{body['id']}", json={"status": "inactive"})
        assert updated.status_code == 200
        assert updated.json()["status"] == "inactive"
        assert updated.json()["company"] == "Acme Ltd"

        assert client.delete(f"/api/v1/clients/{body['id']}").status_code == 204
        assert client.get(f"/api/v1/clients/{body['id']}").status_code == 404

    def test_missing_name_is_rejected(self, client):
        assert client.post("/api/v1/clients/", json={"email": "x@y.test"}).status_code == 422

    def test_store_failure_is_bad_gateway(self, client):
        class DownStore(InMemoryRecordStore):
            def fetch_records(self, table, params):
                return {"success": False, "message": "Service temporarily unavailable"}

        set_record_store(DownStore())
        response = client.get("/api/v1/clients/")
        assert response.status_code == 502
        assert response.json() == {"detail": "Service temporarily unavailable"}

    def test_update_and_delete_of_missing_client_are_not_found(self, client):
        updated = client.put("/api/v1/clients/404", json={"status": "inactive"})
        assert updated.status_code == 404
        assert updated.json() == {"detail": "Client 404 not found"}
        assert client.delete("/api/v1/clients/404").status_code == 404


class TestTasksApi:
    def test_timer_lifecycle(self, client):
        project = _create_project(client)
        task = client.post(
            "/api/v1/tasks/",
            json={"title": "Copy", "due_date": "2025-04-15", "project_id": project["id"]},
        ).json()
        assert task["priority"] == "medium"
        assert task["time_tracking"] == {"total_time": 0, "active_timer": None, "time_logs": []}

        started = client.post(f"/api/v1/tasks/{task['id']}/timer/start")
        assert started.status_code == 200
        assert started.json()["task_id"] == task["id"]

        again = client.post(f"/api/v1/tasks/{task['id']}/timer/start")
        assert again.status_code == 409
        assert again.json()["detail"] == "Timer already running for this task"

        stopped = client.post(f"/api/v1/tasks/{task['id']}/timer/stop")
        assert stopped.status_code == 200
        log = stopped.json()
        assert log["duration"] >= 0

        logs = client.get(f"/api/v1/tasks/{task['id']}/time-logs").json()
        assert [entry["id"] for entry in logs] == [log["id"]]

        fetched = client.get(f"/api/v1/tasks/{task['id']}").json()
        assert fetched["time_tracking"]["total_time"] == log["duration"]
        assert fetched["time_tracking"]["active_timer"] is None

    def test_stop_without_start_is_conflict(self, client):
        response = client.post("/api/v1/tasks/12/timer/stop")
        assert response.status_code == 409
        assert response.json()["detail"] == "No active timer for this task"

    def test_status_update_and_delete(self, client):
        task = client.post("/api/v1/tasks/", json={"title": "Logo"}).json()
        client.post(f"/api/v1/tasks/{task['id']}/timer/start")

        patched = client.patch(f"/api/v1/tasks/{task['id']}/status", json={"status": "done"})
        assert patched.json()["status"] == "done"

        assert client.delete(f"/api/v1/tasks/{task['id']}").status_code == 204
        assert client.get(f"/api/v1/tasks/{task['id']}/time-logs").json() == []
        # The timer state went with the task.
        assert client.post(f"/api/v1/tasks/{task['id']}/timer/stop").status_code == 409


class TestInvoicesApi:
    def test_validation_errors(self, client):
        response = client.post("/api/v1/invoices/", json={"amount": 0, "project_id": 1, "due_date": "2025-05-01"})
        assert response.status_code == 422
        assert response.json() == {"detail": "Amount must be greater than 0"}

        response = client.post("/api/v1/invoices/", json={"amount": 10, "due_date": "2025-05-01"})
        assert response.json() == {"detail": "Project ID is required"}

    def test_send_and_pay(self, client):
        project = _create_project(client)
        invoice = client.post(
            "/api/v1/invoices/",
            json={"amount": 1200, "project_id": project["id"], "due_date": "2025-05-01"},
        ).json()
        assert invoice["status"] == "draft"

        sent = client.post(f"/api/v1/invoices/{invoice['id']}/send")
        assert sent.json()["status"] == "sent"

        unpaid = client.post(f"/api/v1/invoices/{invoice['id']}/pay", json={})
        assert unpaid.status_code == 422

        paid = client.post(
            f"/api/v1/invoices/{invoice['id']}/pay",
            json={"payment_date": "2025-05-03T10:00:00Z"},
        )
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert paid.json()["payment_date"].startswith("2025-05-03T10:00:00")


class TestDashboardApi:
    def test_dashboard_shape_and_values(self, client):
        project = _create_project(client)
        client.post(
            "/api/v1/tasks/",
            json={"title": "Copy", "due_date": "2020-01-01", "project_id": project["id"]},
        )
        client.post(
            "/api/v1/tasks/",
            json={"title": "Logo", "status": "done", "due_date": "2099-01-01", "project_id": project["id"]},
        )
        for amount, status in [(100.4, "paid"), (50.1, "paid"), (10, "sent")]:
            client.post(
                "/api/v1/invoices/",
                json={"amount": amount, "status": status, "project_id": project["id"], "due_date": "2025-05-01"},
            )

        response = client.get("/api/v1/dashboard")
        assert response.status_code == 200
        body = response.json()
        assert body["summary"] == {
            "totalClients": 1,
            "activeProjects": 1,
            "pendingTasks": 1,
            "monthlyRevenue": 150,
            "completedTasks": 1,
            "overdueItems": 1,
        }
        assert body["quickStats"] == {
            "projectsThisWeek": 1,
            "tasksCompleted": 1,
            "hoursTracked": 0.0,
            "invoicesSent": 1,
        }
