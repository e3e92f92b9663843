"""Alert listing and operator state changes."""
from datetime import timedelta

from sqlalchemy import select

from electricpulse.models.audit_log import AuditLog
from electricpulse.utils.clock import utc_now

from conftest import add_reading

API = "/api/v1/alerts"


def seed_fleet(db):
    now = utc_now()
    add_reading(db, "MTR-001", now)
    add_reading(db, "MTR-002", now, pf1=0.80)
    add_reading(db, "MTR-003", now, kwt=60000.0)
    add_reading(db, "MTR-004", now, v1=230.0, v2=245.0, v3=228.0)


class TestListAlerts:
    def test_current_alerts(self, client, db, user_headers):
        seed_fleet(db)
        resp = client.get(API, headers=user_headers)
        assert resp.status_code == 200
        alerts = resp.json()
        assert {a["id"] for a in alerts} == {"pf_MTR-002", "power_MTR-003", "voltage_MTR-004"}
        assert all(a["status"] == "active" for a in alerts)

    def test_only_latest_reading_counts(self, client, db, user_headers):
        now = utc_now()
        add_reading(db, "MTR-002", now - timedelta(days=400), pf1=0.5)
        add_reading(db, "MTR-002", now)
        assert client.get(API, headers=user_headers).json() == []

    def test_requires_auth(self, client):
        assert client.get(API).status_code == 401


class TestAlertState:
    def test_acknowledge_and_filter(self, client, db, user_headers, operator):
        seed_fleet(db)
        resp = client.post(
            f"{API}/pf_MTR-002/acknowledge",
            json={"note": "capacitor bank scheduled"},
            headers=user_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "acknowledged"

        acked = client.get(API, params={"status": "acknowledged"}, headers=user_headers).json()
        assert [a["id"] for a in acked] == ["pf_MTR-002"]
        active = client.get(API, params={"status": "active"}, headers=user_headers).json()
        assert {a["id"] for a in active} == {"power_MTR-003", "voltage_MTR-004"}

        entry = db.execute(
            select(AuditLog).where(AuditLog.action == "alert_acknowledged")
        ).scalar_one()
        assert entry.resource_id == "pf_MTR-002"
        assert entry.user_id == operator.id
        assert entry.details == {"note": "capacitor bank scheduled"}

    def test_resolve_without_body(self, client, db, user_headers):
        seed_fleet(db)
        resp = client.post(f"{API}/power_MTR-003/resolve", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "resolved"

    def test_state_can_move_on(self, client, db, user_headers):
        seed_fleet(db)
        client.post(f"{API}/pf_MTR-002/acknowledge", headers=user_headers)
        client.post(f"{API}/pf_MTR-002/resolve", headers=user_headers)
        resolved = client.get(API, params={"status": "resolved"}, headers=user_headers).json()
        assert [a["id"] for a in resolved] == ["pf_MTR-002"]

    def test_clear_state(self, client, db, user_headers):
        seed_fleet(db)
        client.post(f"{API}/pf_MTR-002/acknowledge", headers=user_headers)

        resp = client.delete(f"{API}/pf_MTR-002/state", headers=user_headers)
        assert resp.status_code == 204
        alerts = {a["id"]: a for a in client.get(API, headers=user_headers).json()}
        assert alerts["pf_MTR-002"]["status"] == "active"

        assert client.delete(f"{API}/pf_MTR-002/state", headers=user_headers).status_code == 404

    def test_alert_not_raised(self, client, db, user_headers):
        seed_fleet(db)
        resp = client.post(f"{API}/pf_MTR-001/acknowledge", headers=user_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Alert is not currently raised"

    def test_bad_status_filter(self, client, user_headers):
        resp = client.get(API, params={"status": "snoozed"}, headers=user_headers)
        assert resp.status_code == 422
