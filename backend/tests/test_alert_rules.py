"""Threshold rules evaluated against latest readings."""
from datetime import datetime
from types import SimpleNamespace

from electricpulse.utils.alert_rules import AlertThresholds, evaluate_alerts

from conftest import HEALTHY

TS = datetime(2024, 5, 1, 12, 0, 0)


def reading(meter_id: str, **fields) -> SimpleNamespace:
    return SimpleNamespace(meter_id=meter_id, timestamp=TS, **{**HEALTHY, **fields})


class TestEvaluateAlerts:
    def test_fleet_raises_one_alert_per_breach(self):
        readings = [
            reading("MTR-001"),
            reading("MTR-002", pf1=0.80),
            reading("MTR-003", kwt=60000.0),
            reading("MTR-004", v1=230.0, v2=245.0, v3=228.0),
        ]
        alerts = evaluate_alerts(readings)
        assert {a.id for a in alerts} == {"pf_MTR-002", "power_MTR-003", "voltage_MTR-004"}

    def test_healthy_reading_raises_nothing(self):
        assert evaluate_alerts([reading("MTR-001")]) == []

    def test_low_power_factor_content(self):
        [alert] = evaluate_alerts([reading("MTR-002", pf2=0.70)])
        assert alert.type == "warning"
        assert alert.title == "Low Power Factor"
        assert alert.message == "Power factor below 0.85 on meter MTR-002"
        assert alert.value == "PF1: 0.95, PF2: 0.70, PF3: 0.95"
        assert alert.timestamp == TS
        assert alert.status == "active"

    def test_power_factor_at_threshold_is_fine(self):
        assert evaluate_alerts([reading("MTR-002", pf1=0.85)]) == []

    def test_high_power_is_critical(self):
        [alert] = evaluate_alerts([reading("MTR-003", kwt=60000.0)])
        assert alert.type == "critical"
        assert alert.message == "Power consumption exceeds 50000 kW on meter MTR-003"
        assert alert.value == "60000.0 kW"

    def test_high_power_message_follows_configured_limit(self):
        limits = AlertThresholds(max_total_kw=500.0)
        [alert] = evaluate_alerts([reading("MTR-003", kwt=750.0)], limits)
        assert alert.message == "Power consumption exceeds 500 kW on meter MTR-003"
        assert alert.value == "750.0 kW"

    def test_power_at_threshold_is_fine(self):
        assert evaluate_alerts([reading("MTR-003", kwt=50000.0)]) == []

    def test_voltage_imbalance_value(self):
        [alert] = evaluate_alerts([reading("MTR-004", v1=230.0, v2=245.0, v3=228.0)])
        assert alert.id == "voltage_MTR-004"
        assert alert.value == "V1: 230.0V, V2: 245.0V, V3: 228.0V"

    def test_spread_of_exactly_ten_volts_is_fine(self):
        assert evaluate_alerts([reading("MTR-004", v1=230.0, v2=240.0, v3=235.0)]) == []

    def test_missing_values_never_trigger(self):
        readings = [reading("MTR-005", pf1=None, pf2=None, pf3=None, kwt=None, v1=None, v2=None, v3=300.0)]
        assert evaluate_alerts(readings) == []

    def test_one_meter_can_breach_every_rule(self):
        alerts = evaluate_alerts([reading("MTR-009", pf3=0.5, kwt=70000.0, v3=200.0)])
        assert [a.id for a in alerts] == ["pf_MTR-009", "power_MTR-009", "voltage_MTR-009"]

    def test_custom_thresholds(self):
        strict = AlertThresholds(min_power_factor=0.99, max_total_kw=500.0, max_voltage_spread=1.0)
        alerts = evaluate_alerts([reading("MTR-001")], strict)
        assert len(alerts) == 3

    def test_accepts_generator(self):
        alerts = evaluate_alerts(r for r in [reading("MTR-002", pf1=0.5), reading("MTR-003", kwt=99999.0)])
        assert {a.id for a in alerts} == {"pf_MTR-002", "power_MTR-003"}
