"""Meter list, latest readings and reading history."""
import random
from datetime import datetime, timedelta

from electricpulse.services.reading_service import ReadingService
from electricpulse.utils.clock import utc_now

from conftest import add_reading

API = "/api/v1"
BASE = datetime(2024, 5, 1, 12, 0, 0)


class TestLatestPerMeter:
    def test_one_row_per_meter_with_greatest_timestamp(self, db):
        rng = random.Random(42)
        expected = {}
        for _ in range(60):
            meter_id = f"MTR-{rng.randint(1, 6):03d}"
            ts = BASE + timedelta(minutes=rng.randint(0, 10_000))
            add_reading(db, meter_id, ts, kwt=rng.uniform(100, 2000))
            expected[meter_id] = max(expected.get(meter_id, ts), ts)

        latest = ReadingService(db).latest_per_meter()
        assert [r.meter_id for r in latest] == sorted(expected)
        assert {r.meter_id: r.timestamp for r in latest} == expected

    def test_timestamp_tie_goes_to_last_inserted(self, db):
        add_reading(db, "MTR-001", BASE, kwt=1.0)
        newer = add_reading(db, "MTR-001", BASE, kwt=2.0)
        [latest] = ReadingService(db).latest_per_meter()
        assert latest.id == newer.id

    def test_endpoint(self, client, db, user_headers):
        add_reading(db, "MTR-002", BASE)
        add_reading(db, "MTR-001", BASE)
        add_reading(db, "MTR-001", BASE + timedelta(minutes=5), kwt=1234.0)

        resp = client.get(f"{API}/readings/latest", headers=user_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert [r["meter_id"] for r in data] == ["MTR-001", "MTR-002"]
        assert data[0]["kwt"] == 1234.0

    def test_empty_table(self, client, user_headers):
        resp = client.get(f"{API}/readings/latest", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json() == []


class TestMeterReadings:
    def _seed(self, db, count=5):
        for n in range(count):
            add_reading(db, "MTR-001", BASE + timedelta(hours=n), kwt=float(n))
        add_reading(db, "MTR-002", BASE)

    def test_newest_first(self, client, db, user_headers):
        self._seed(db)
        resp = client.get(f"{API}/meters/MTR-001/readings", headers=user_headers)
        assert resp.status_code == 200
        assert [r["kwt"] for r in resp.json()] == [4.0, 3.0, 2.0, 1.0, 0.0]

    def test_limit(self, client, db, user_headers):
        self._seed(db)
        resp = client.get(f"{API}/meters/MTR-001/readings?limit=2", headers=user_headers)
        assert [r["kwt"] for r in resp.json()] == [4.0, 3.0]

    def test_limit_out_of_range(self, client, user_headers):
        resp = client.get(f"{API}/meters/MTR-001/readings?limit=0", headers=user_headers)
        assert resp.status_code == 422

    def test_bounds_are_inclusive(self, client, db, user_headers):
        self._seed(db)
        resp = client.get(
            f"{API}/meters/MTR-001/readings",
            params={"start_date": "2024-05-01T13:00:00", "end_date": "2024-05-01T15:00:00"},
            headers=user_headers,
        )
        assert [r["kwt"] for r in resp.json()] == [3.0, 2.0, 1.0]

    def test_start_bound_alone(self, client, db, user_headers):
        self._seed(db)
        resp = client.get(
            f"{API}/meters/MTR-001/readings",
            params={"start_date": "2024-05-01T15:00:00"},
            headers=user_headers,
        )
        assert [r["kwt"] for r in resp.json()] == [4.0, 3.0]

    def test_aware_bound_is_converted_to_utc(self, client, db, user_headers):
        self._seed(db)
        resp = client.get(
            f"{API}/meters/MTR-001/readings",
            params={"end_date": "2024-05-01T14:00:00+01:00"},
            headers=user_headers,
        )
        assert [r["kwt"] for r in resp.json()] == [1.0, 0.0]

    def test_unknown_meter_is_empty(self, client, user_headers):
        resp = client.get(f"{API}/meters/NOPE/readings", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json() == []


class TestMeterLatest:
    def test_latest(self, client, db, user_headers):
        add_reading(db, "MTR-001", BASE, kwt=1.0)
        add_reading(db, "MTR-001", BASE + timedelta(hours=1), kwt=2.0)
        resp = client.get(f"{API}/meters/MTR-001/latest", headers=user_headers)
        assert resp.status_code == 200
        assert resp.json()["kwt"] == 2.0

    def test_unknown_meter_404(self, client, user_headers):
        resp = client.get(f"{API}/meters/NOPE/latest", headers=user_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "No readings found"


class TestMeters:
    def test_status_from_last_reading(self, client, db, user_headers):
        now = utc_now()
        add_reading(db, "MTR-001", now)
        add_reading(db, "MTR-002", now - timedelta(hours=3))

        resp = client.get(f"{API}/meters", headers=user_headers)
        assert resp.status_code == 200
        meters = {m["meter_id"]: m for m in resp.json()}
        assert meters["MTR-001"]["status"] == "active"
        assert meters["MTR-002"]["status"] == "inactive"
        assert meters["MTR-001"]["name"] == "Meter MTR-001"
        assert meters["MTR-001"]["location"] == "Production Facility"


class TestRecentReadings:
    def test_only_trailing_window(self, client, db, user_headers):
        now = utc_now()
        add_reading(db, "MTR-001", now, kwt=5.0)
        add_reading(db, "MTR-001", now - timedelta(hours=2), kwt=6.0)

        resp = client.get(f"{API}/readings/recent?seconds=60", headers=user_headers)
        assert resp.status_code == 200
        assert [r["kwt"] for r in resp.json()] == [5.0]
