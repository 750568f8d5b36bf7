"""
Tests for public report submission and director review.
"""
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from motri.core.errors import ValidationError
from motri.models.report import Report
from motri.repositories.report_repo import create_report, list_reports
from motri.services.report_service import REQUIRED_FIELDS, submit_report

from tests.conftest import VALID_REPORT

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _submit(client, **overrides):
    data = dict(VALID_REPORT)
    data.update(overrides)
    data = {k: v for k, v in data.items() if v is not None}
    return client.post("/api/reports", data=data)


def _count(db_session) -> int:
    db_session.expire_all()
    return db_session.query(Report).count()


class TestSubmit:
    def test_submit_without_auth(self, client, db_session):
        resp = _submit(client)
        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        data = body["data"]
        assert data["id"] > 0
        assert data["abuseType"] == "Emotional"
        assert data["workPosition"] == "Low"
        assert data["incidentPlace"] == "Head office"
        assert data["image"] is None
        assert data["createdAt"]
        assert _count(db_session) == 1

    @pytest.mark.parametrize("field", list(REQUIRED_FIELDS))
    def test_missing_field_is_rejected(self, client, db_session, field):
        resp = _submit(client, **{field: None})
        assert resp.status_code == 400
        assert field in resp.json()["message"]
        assert _count(db_session) == 0

    def test_blank_field_is_rejected(self, client, db_session):
        resp = _submit(client, description="   ", phone="")
        assert resp.status_code == 400
        assert resp.json()["message"] == "Missing required fields: phone, description"
        assert _count(db_session) == 0

    def test_unknown_abuse_type(self, client, db_session):
        resp = _submit(client, abuseType="Spam")
        assert resp.status_code == 400
        assert "abuseType" in resp.json()["message"]
        assert _count(db_session) == 0

    def test_with_image(self, client, settings):
        resp = client.post(
            "/api/reports",
            data=VALID_REPORT,
            files={"image": ("photo.png", PNG_BYTES, "image/png")},
        )
        assert resp.status_code == 201
        image = resp.json()["data"]["image"]
        assert image.startswith("uploads/") and image.endswith(".png")
        stored = Path(settings.UPLOAD_DIR) / Path(image).name
        assert stored.read_bytes() == PNG_BYTES

        served = client.get(f"/{image}")
        assert served.status_code == 200
        assert served.content == PNG_BYTES

    def test_image_upload_is_logged_with_original_name(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="motri.services.report_service"):
            resp = client.post(
                "/api/reports",
                data=VALID_REPORT,
                files={"image": ("bruise.png", PNG_BYTES, "image/png")},
            )
        assert resp.status_code == 201
        assert "bruise.png" in caplog.text
        assert resp.json()["data"]["image"] in caplog.text

    def test_image_with_wrong_type(self, client, db_session, settings):
        resp = client.post(
            "/api/reports",
            data=VALID_REPORT,
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        assert resp.status_code == 400
        assert _count(db_session) == 0
        assert list(Path(settings.UPLOAD_DIR).iterdir()) == []

    def test_service_rejects_before_storing(self, db_session, app):
        with pytest.raises(ValidationError):
            submit_report(db_session, app.state.image_storage, {"name": "x"})
        assert _count(db_session) == 0


class TestList:
    def test_requires_auth(self, client):
        _submit(client)
        assert client.get("/api/reports").status_code == 401

    def test_newest_first(self, client, auth_headers):
        ids = [_submit(client, name=f"Reporter {i}").json()["data"]["id"] for i in range(3)]
        resp = client.get("/api/reports", headers=auth_headers)
        assert resp.status_code == 200
        reports = resp.json()
        assert [r["id"] for r in reports] == list(reversed(ids))
        created = [r["createdAt"] for r in reports]
        assert created == sorted(created, reverse=True)

    def test_orders_by_creation_time_not_id(self, db_session):
        now = datetime.now(timezone.utc)
        fields = {
            column: VALID_REPORT[wire] for wire, column in REQUIRED_FIELDS.items()
        }
        older = create_report(db_session, created_at=now - timedelta(days=2), **fields)
        newest = create_report(db_session, created_at=now, **fields)
        middle = create_report(db_session, created_at=now - timedelta(days=1), **fields)
        assert [r.id for r in list_reports(db_session)] == [newest.id, middle.id, older.id]

    def test_filter_by_abuse_type_and_search(self, client, auth_headers):
        _submit(client, abuseType="Physical", name="Abebe")
        _submit(client, abuseType="Financial", name="Hana")
        _submit(client, abuseType="Physical", name="Tigist")

        physical = client.get("/api/reports", params={"abuseType": "Physical"}, headers=auth_headers).json()
        assert {r["abuseType"] for r in physical} == {"Physical"}
        assert len(physical) == 2

        by_name = client.get("/api/reports", params={"search": "ABEBE"}, headers=auth_headers).json()
        assert [r["name"] for r in by_name] == ["Abebe"]

        combined = client.get(
            "/api/reports",
            params={"abuseType": "Physical", "search": "tigist"},
            headers=auth_headers,
        ).json()
        assert [r["name"] for r in combined] == ["Tigist"]

    def test_search_by_phone(self, client, auth_headers):
        _submit(client, name="Abebe", phone="+251911123456")
        _submit(client, name="Hana", phone="+251922000000")

        found = client.get("/api/reports", params={"search": "911123"}, headers=auth_headers).json()
        assert [r["name"] for r in found] == ["Abebe"]

    def test_search_by_abuse_type(self, client, auth_headers):
        _submit(client, name="Abebe", abuseType="Financial")
        _submit(client, name="Hana", abuseType="Emotional")

        found = client.get("/api/reports", params={"search": "financ"}, headers=auth_headers).json()
        assert [r["name"] for r in found] == ["Abebe"]

    def test_search_does_not_search_description(self, client, auth_headers):
        _submit(client, description="Salary withheld for months")
        found = client.get("/api/reports", params={"search": "salary"}, headers=auth_headers).json()
        assert found == []

    @pytest.mark.parametrize("term", ["%", "_", "\\"])
    def test_search_wildcards_are_literal(self, client, auth_headers, term):
        _submit(client, name="Abebe")
        found = client.get("/api/reports", params={"search": term}, headers=auth_headers).json()
        assert found == []

    def test_search_matches_literal_percent(self, client, auth_headers):
        _submit(client, name="Abebe 100%")
        _submit(client, name="Abebe 1000")
        found = client.get("/api/reports", params={"search": "100%"}, headers=auth_headers).json()
        assert [r["name"] for r in found] == ["Abebe 100%"]

    def test_invalid_filter(self, client, auth_headers):
        resp = client.get("/api/reports", params={"abuseType": "Spam"}, headers=auth_headers)
        assert resp.status_code == 400


class TestDelete:
    def test_delete_removes_exactly_one(self, client, auth_headers):
        keep = _submit(client, name="Keep").json()["data"]["id"]
        gone = _submit(client, name="Gone").json()["data"]["id"]

        resp = client.delete(f"/api/reports/{gone}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Report deleted successfully"}

        remaining = [r["id"] for r in client.get("/api/reports", headers=auth_headers).json()]
        assert remaining == [keep]

    def test_delete_unknown_id(self, client, auth_headers):
        existing = _submit(client).json()["data"]["id"]
        resp = client.delete("/api/reports/999999", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json() == {"message": "Report not found"}
        assert [r["id"] for r in client.get("/api/reports", headers=auth_headers).json()] == [existing]

    def test_delete_requires_auth(self, client):
        report_id = _submit(client).json()["data"]["id"]
        assert client.delete(f"/api/reports/{report_id}").status_code == 401

    def test_delete_removes_image_file(self, client, auth_headers, settings):
        resp = client.post(
            "/api/reports",
            data=VALID_REPORT,
            files={"image": ("photo.png", PNG_BYTES, "image/png")},
        )
        data = resp.json()["data"]
        stored = Path(settings.UPLOAD_DIR) / Path(data["image"]).name
        assert stored.exists()

        assert client.delete(f"/api/reports/{data['id']}", headers=auth_headers).status_code == 200
        assert not stored.exists()


def test_example_scenario(client, director):
    """Login, public submit, review, delete."""
    login = client.post("/api/auth/login", json={"identifier": "alice", "password": "secret123"})
    assert login.status_code == 200
    assert client.post("/api/auth/login", json={"identifier": "alice", "password": "wrong"}).status_code == 401
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    created = _submit(client)
    assert created.status_code == 201
    report_id = created.json()["data"]["id"]

    listed = client.get("/api/reports", headers=headers).json()
    assert listed[0]["id"] == report_id

    assert client.delete(f"/api/reports/{report_id}", headers=headers).status_code == 200
    assert client.get("/api/reports", headers=headers).json() == []
