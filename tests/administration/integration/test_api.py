"""Integration tests for Administration API endpoints via TestClient."""

from uuid import uuid4

import pytest
from administration.api import audit_router, report_router, setting_router
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(report_router)
    app.include_router(setting_router)
    app.include_router(audit_router)
    register_exception_handlers(app)
    return TestClient(app)


def _as(user_id, role="Customer"):
    return {"X-User-Id": user_id, "X-User-Role": role}


ADMIN = _as("admin-001", "Admin")


def _file_report(client, content_id=None):
    response = client.post(
        "/reports",
        json={"content_type": "Store", "content_id": content_id or f"store-{uuid4().hex[:8]}", "reason": "Scam"},
        headers=_as("cust-001"),
    )
    assert response.status_code == 201
    return response.json()["report_id"]


class TestReports:
    def test_any_user_can_report(self, client):
        assert _file_report(client)

    def test_reporting_requires_authentication(self, client):
        response = client.post("/reports", json={"content_type": "Store", "content_id": "s-1", "reason": "Scam"})
        assert response.status_code == 401

    def test_unknown_content_type_is_400(self, client):
        response = client.post(
            "/reports",
            json={"content_type": "Planet", "content_id": "p-1", "reason": "Scam"},
            headers=_as("cust-001"),
        )
        assert response.status_code == 400

    def test_only_admins_list_reports(self, client):
        report_id = _file_report(client)
        assert client.get("/reports", headers=_as("cust-001")).status_code == 403

        response = client.get("/reports", params={"status": "Pending"}, headers=ADMIN)
        assert response.status_code == 200
        assert report_id in [r["report_id"] for r in response.json()]

    def test_review_report(self, client):
        report_id = _file_report(client)
        body = {"status": "Resolved", "resolution": "Store suspended"}
        assert client.put(f"/reports/{report_id}/review", json=body, headers=ADMIN).status_code == 200
        assert client.put(f"/reports/{report_id}/review", json=body, headers=ADMIN).status_code == 400

        resolved = client.get("/reports", params={"status": "Resolved"}, headers=ADMIN).json()
        report = next(r for r in resolved if r["report_id"] == report_id)
        assert report["reviewed_by"] == "admin-001"
        assert report["resolution"] == "Store suspended"

    def test_review_unknown_report_is_404(self, client):
        response = client.put("/reports/rep-missing/review", json={"status": "Rejected"}, headers=ADMIN)
        assert response.status_code == 404


class TestSettings:
    def test_update_and_list_settings(self, client):
        key = f"vendor_signups_{uuid4().hex[:6]}"
        response = client.put(f"/settings/{key}", json={"value": "open", "category": "vendors"}, headers=ADMIN)
        assert response.status_code == 200

        settings = client.get("/settings", headers=ADMIN).json()
        setting = next(s for s in settings if s["key"] == key)
        assert setting["value"] == "open"
        assert setting["updated_by"] == "admin-001"

    def test_settings_are_admin_only(self, client):
        assert client.get("/settings", headers=_as("pro-1", "Professional")).status_code == 403
        assert client.put("/settings/x", json={"value": "1"}, headers=_as("cust-1")).status_code == 403


class TestAuditLogs:
    def test_setting_change_is_audited(self, client):
        key = f"banner_{uuid4().hex[:6]}"
        client.put(f"/settings/{key}", json={"value": "Holiday sale"}, headers=_as("super-9", "Super_Admin"))

        response = client.get("/audit-logs", params={"action": "SETTING_UPDATED", "user_id": "super-9"}, headers=ADMIN)
        assert response.status_code == 200
        assert key in [entry["details"]["key"] for entry in response.json()]

    def test_limit_is_bounded(self, client):
        assert client.get("/audit-logs", params={"limit": 0}, headers=ADMIN).status_code == 422
        assert client.get("/audit-logs", params={"limit": 5}, headers=ADMIN).status_code == 200

    def test_audit_logs_are_admin_only(self, client):
        assert client.get("/audit-logs", headers=_as("cust-1")).status_code == 403
