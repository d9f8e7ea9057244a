from __future__ import annotations

import pytest

from mutabaah_portal.main import create_app
from tests.fakes import build_test_container


@pytest.fixture
def container():
    return build_test_container()


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


def _client_as(app, employee_id):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["employee_id"] = employee_id
    return client


def test_requests_without_session_are_forbidden(app):
    resp = app.test_client().get("/api/monthly-activities?month=2024-03")

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "AuthorizationError"


def test_mark_and_read_month(app):
    client = _client_as(app, "E1")

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-03", "day_key": "05", "activity_id": "jujur"},
    )
    assert resp.status_code == 200
    assert resp.get_json()["days"] == {"05": {"jujur": True}}

    resp = client.get("/api/monthly-activities")
    assert resp.get_json() == {"month_key": "2024-03", "days": {"05": {"jujur": True}}}


def test_closed_period_maps_to_423(app):
    client = _client_as(app, "E1")

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-02", "day_key": "20", "activity_id": "jujur"},
    )

    assert resp.status_code == 423
    assert resp.get_json()["error"] == "Periode pelaporan telah ditutup untuk tanggal ini."


def test_invalid_day_key_maps_to_400(app):
    client = _client_as(app, "E1")

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-03", "day_key": "5", "activity_id": "jujur"},
    )

    assert resp.status_code == 400


def test_string_value_is_rejected_and_keeps_credit(app):
    client = _client_as(app, "E1")
    client.post("/api/monthly-activities", json={"month_key": "2024-03", "day_key": "05", "activity_id": "jujur"})

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-03", "day_key": "05", "activity_id": "jujur", "value": "false"},
    )
    assert resp.status_code == 400

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-03", "day_key": "06", "activity_id": "jujur", "value": 1},
    )
    assert resp.status_code == 400
    assert client.get("/api/monthly-activities").get_json()["days"] == {"05": {"jujur": True}}


def test_boolean_false_unmarks_the_day(app):
    client = _client_as(app, "E1")
    client.post("/api/monthly-activities", json={"month_key": "2024-03", "day_key": "05", "activity_id": "jujur"})

    resp = client.post(
        "/api/monthly-activities",
        json={"month_key": "2024-03", "day_key": "05", "activity_id": "jujur", "value": False},
    )

    assert resp.status_code == 200
    assert resp.get_json()["days"] == {}


def test_prayer_checkin_and_sync(app):
    client = _client_as(app, "E1")

    resp = client.post("/api/prayer-checkins", json={"prayer_id": "subuh", "date": "2024-03-05"})
    assert resp.status_code == 201
    assert resp.get_json()["days"] == {"05": {"subuh": True}}

    resp = client.post("/api/monthly-activities/sync", json={"month_key": "2024-03"})
    assert resp.get_json()["days"] == {"05": {"subuh": True}}


def test_activation_endpoints(app):
    client = _client_as(app, "E1")

    resp = client.post("/api/activated-months", json={"month_key": "2024-01"})
    assert resp.status_code == 201
    resp = client.post("/api/activated-months", json={"month_key": "2024-01"})
    assert resp.status_code == 200
    assert resp.get_json()["months"] == ["2024-01", "2024-03"]

    assert client.get("/api/activated-months").get_json() == {"months": ["2024-01", "2024-03"]}


def test_report_flow_over_http(app):
    mentee = _client_as(app, "E1")
    mentor = _client_as(app, "M1")
    stranger = _client_as(app, "X9")

    resp = mentee.post("/api/monthly-reports", json={"month_key": "2024-03"})
    assert resp.status_code == 201
    submission_id = resp.get_json()["id"]

    assert mentee.post("/api/monthly-reports", json={"month_key": "2024-03"}).status_code == 400

    resp = stranger.patch(f"/api/monthly-reports/{submission_id}", json={"decision": "approved"})
    assert resp.status_code == 403

    review_list = mentor.get("/api/monthly-reports?scope=review").get_json()["items"]
    assert [s["id"] for s in review_list] == [submission_id]

    resp = mentor.patch(f"/api/monthly-reports/{submission_id}", json={"decision": "approved", "notes": "ok"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "pending_kaunit"

    resp = mentor.patch(f"/api/monthly-reports/{submission_id}", json={"decision": "approved"})
    assert resp.status_code == 403

    assert mentee.patch("/api/monthly-reports/unknown", json={"decision": "approved"}).status_code == 404


def test_summary_endpoint(app):
    client = _client_as(app, "E1")
    client.post("/api/monthly-activities", json={"month_key": "2024-03", "day_key": "01", "activity_id": "infaq"})

    body = client.get("/api/monthly-reports/summary?month=2024-03").get_json()

    infaq = next(r for r in body["activities"] if r["activity_id"] == "infaq")
    assert infaq["met"] is True
    assert body["month_key"] == "2024-03"


def test_manual_request_endpoints(app, container):
    mentee = _client_as(app, "E1")
    mentor = _client_as(app, "M1")

    resp = mentee.post("/api/manual-requests/tadarus", json={"date": "2024-03-07", "category": "BBQ"})
    assert resp.status_code == 201
    request_id = resp.get_json()["id"]

    pending = mentor.get("/api/manual-requests/tadarus?scope=review").get_json()["items"]
    assert [r["id"] for r in pending] == [request_id]

    resp = mentor.patch(f"/api/manual-requests/tadarus/{request_id}", json={"decision": "approved"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "approved"
    assert container.progress_service.get_month(employee_id="E1", month_key="2024-03") == {"07": {"tadarus": True}}

    resp = mentee.post(
        "/api/manual-requests/prayer",
        json={"date": "2024-03-02", "prayer_id": "maghrib", "reason": "perjalanan"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["prayer_name"] == "Maghrib"

    assert mentee.get("/api/manual-requests/cuti").status_code == 404


def test_reading_report_and_months(app):
    client = _client_as(app, "E1")

    resp = client.post("/api/reading-reports", json={"date": "2024-03-04", "title": "Juz 2"})
    assert resp.status_code == 201
    assert resp.get_json()["days"] == {"04": {"baca_alquran_buku": True}}

    resp = client.get("/api/monthly-activities/months")
    assert resp.get_json() == {"months": ["2024-03"]}


def test_notifications_inbox_lists_only_own_items(app):
    mentee = _client_as(app, "E1")
    mentee.post("/api/monthly-reports", json={"month_key": "2024-03"})

    items = _client_as(app, "M1").get("/api/notifications").get_json()["items"]
    assert [n["type"] for n in items] == ["monthly_report_submitted"]
    assert items[0]["is_read"] is False

    assert mentee.get("/api/notifications").get_json()["items"] == []
