"""
Tests for the Flask API routes.
"""

import pytest

from tests.conftest import ADMIN_PASSWORD


class TestAccountRoutes:
    """Test /api/accounts endpoints."""

    def test_lookup_success(self, client, kim_query):
        response = client.post("/api/accounts/lookup", json=dict(kim_query, platform="Google"))

        assert response.status_code == 200
        assert response.get_json() == {
            "status": "success",
            "id": "kim@gmail.com",
            "password": "gpw",
            "platform": "Google",
        }

    def test_lookup_warning(self, client, kim_query):
        response = client.post("/api/accounts/lookup", json=dict(kim_query, platform="Whale"))

        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "warning"
        assert "Whale" in body["warning"]

    def test_lookup_not_found(self, client, kim_query):
        response = client.post("/api/accounts/lookup", json=dict(kim_query, name="Nobody", platform="Google"))

        assert response.status_code == 404
        assert response.get_json()["kind"] == "not_found"

    def test_lookup_invalid_platform(self, client, kim_query):
        response = client.post("/api/accounts/lookup", json=dict(kim_query, platform="Yahoo"))

        assert response.status_code == 400
        assert response.get_json()["status"] == "error"

    def test_lookup_without_json_body(self, client):
        response = client.post("/api/accounts/lookup", data="name=Kim")

        assert response.status_code == 400
        assert "JSON object" in response.get_json()["error"]

    def test_upsert_then_lookup(self, client):
        student = {"name": "Choi", "studentId": "S010", "dob": "2006-02-03", "phone": "010-9999-8888"}

        created = client.post("/api/accounts", json=dict(student, platform="Whale", id="choi", password="cpw"))
        updated = client.post("/api/accounts", json=dict(student, platform="Whale", id="choi2", password="cpw2"))
        found = client.post("/api/accounts/lookup", json=dict(student, dob="20060203", platform="Whale"))

        assert created.status_code == 200
        assert created.get_json()["created"] is True
        assert updated.get_json()["created"] is False
        assert found.get_json()["id"] == "choi2"

    def test_upsert_requires_identity_fields(self, client):
        response = client.post("/api/accounts", json={"platform": "Google", "id": "x", "password": "y"})

        assert response.status_code == 400
        assert response.get_json()["error"].startswith("name is required")

    def test_lookup_blank_name_rejected(self, client, kim_query):
        response = client.post("/api/accounts/lookup", json=dict(kim_query, name="  ", platform="Google"))

        assert response.status_code == 400
        assert response.get_json()["error"] == "name is required"

    def test_upsert_invalid_platform(self, client, kim_query):
        response = client.post("/api/accounts", json=dict(kim_query, platform="Yahoo", id="x"))

        assert response.status_code == 400


class TestAdminRoutes:
    """Test /api/admin endpoints."""

    def test_export_wrong_password(self, client):
        response = client.post("/api/admin/export", json={"password": "wrong"})

        assert response.status_code == 401
        body = response.get_json()
        assert body["status"] == "error"
        assert "data" not in body

    def test_export(self, client):
        response = client.post("/api/admin/export", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert len(data) == 3
        assert data[0][0] == "Kim"

    def test_export_csv(self, client):
        response = client.post("/api/admin/export.csv", json={"password": ADMIN_PASSWORD})

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        lines = response.get_data(as_text=True).splitlines()
        assert lines[0].startswith("name,studentId,dob,phone")
        assert len(lines) == 4

    def test_export_csv_form_password(self, client):
        response = client.post("/api/admin/export.csv", data={"password": ADMIN_PASSWORD})

        assert response.status_code == 200

    def test_export_csv_wrong_password(self, client):
        response = client.post("/api/admin/export.csv", json={"password": "wrong"})

        assert response.status_code == 401


class TestApp:
    """Test application setup."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["store"] is True

    def test_root(self, client):
        assert client.get("/").status_code == 200

    def test_unconfigured_store(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173")
        monkeypatch.setattr("app.build_service", lambda: None)
        from app import create_app

        client = create_app().test_client()
        response = client.post("/api/accounts/lookup", json={"platform": "Google"})

        assert response.status_code == 500
        assert response.get_json()["error"] == "Google Sheets store not configured"

    def test_cors_required_in_production(self, monkeypatch):
        monkeypatch.delenv("CORS_ORIGINS", raising=False)
        monkeypatch.delenv("FLASK_ENV", raising=False)
        from app import create_app

        with pytest.raises(ValueError, match="CORS_ORIGINS"):
            create_app()
