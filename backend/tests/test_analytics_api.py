"""Forecast endpoint."""
from datetime import timedelta

from electricpulse.utils.clock import utc_now

from conftest import add_reading

API = "/api/v1/analytics/forecast"


def seed_days(db, values):
    now = utc_now()
    for days_ago, kwt in enumerate(reversed(values)):
        add_reading(db, "MTR-001", now - timedelta(days=days_ago), kwt=kwt)


class TestForecast:
    def test_flat_history(self, client, db, user_headers):
        seed_days(db, [100.0] * 10)
        resp = client.get(API, params={"meter_id": "MTR-001", "days": 3}, headers=user_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["forecast_period"] == "3 days"
        assert data["historical_data_points"] == 10
        assert data["trend_points"] == 10
        assert [p["predicted_power"] for p in data["forecast"]] == [100.0, 100.0, 100.0]
        assert [p["confidence_level"] for p in data["forecast"]] == [0.95, 0.9, 0.85]
        tomorrow = (utc_now() + timedelta(days=1)).date().isoformat()
        assert data["forecast"][0]["date"] == tomorrow

    def test_rising_history(self, client, db, user_headers):
        seed_days(db, [100.0, 110.0, 120.0, 130.0, 140.0, 150.0, 160.0])
        data = client.get(API, params={"meter_id": "MTR-001", "days": 1}, headers=user_headers).json()
        assert data["forecast"][0]["trend"] == "increasing"
        assert abs(data["forecast"][0]["predicted_power"] - 170.0) < 1e-9

    def test_insufficient_history(self, client, db, user_headers):
        seed_days(db, [100.0] * 6)
        resp = client.get(API, params={"meter_id": "MTR-001"}, headers=user_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Insufficient historical data for forecasting"

    def test_days_out_of_range(self, client, user_headers):
        resp = client.get(API, params={"meter_id": "MTR-001", "days": 91}, headers=user_headers)
        assert resp.status_code == 422
